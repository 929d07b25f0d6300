# =============================================================================
# core/services/statistics_service.py - Category Count Aggregation
# =============================================================================
# Counts records per category value (e.g. tasks per status) by issuing one
# filtered Id-only query per value. The queries are independent, so they run
# concurrently on a thread pool and are joined before returning.
#
# If any query fails the whole aggregation fails: the error propagates and
# no partial counts are returned.
# =============================================================================

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from app.config import settings
from core.services.query_builder import EntityQueryBuilder
from lib.record_client import RecordClient

logger = logging.getLogger(__name__)


class StatisticsAggregator:
    """
    Per-category record counter.

    Example:
        aggregator = StatisticsAggregator(RecordClient())
        counts = aggregator.count_by("task6", builder, "status", ["To Do", "Done"])
        # {"To Do": 4, "Done": 7}
    """

    def __init__(self, records: RecordClient, max_workers: int | None = None):
        self.records = records
        self.max_workers = max_workers or settings.STATISTICS_MAX_WORKERS

    def count_by(
        self,
        table: str,
        builder: EntityQueryBuilder,
        field: str,
        values: Sequence[str],
    ) -> dict[str, int]:
        """
        Count records in table for each value of field.

        Args:
            table: Backend table name
            builder: Query builder for the entity (supplies the Id field)
            field: Column to group by
            values: Category values; one query is issued per value

        Returns:
            Dict with exactly one key per value, in the given order.
            Each count is the length of that query's data list.
        """
        if not values:
            return {}

        queries = [builder.build_count_query(field, value) for value in values]
        workers = min(self.max_workers, len(queries))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(self.records.fetch_records, table, query)
                for query in queries
            ]
            try:
                responses = [future.result() for future in futures]
            except Exception as e:
                for future in futures:
                    future.cancel()
                logger.error(f"Error counting {table} records by {field}: {e}")
                raise

        counts = {
            value: len(response.get("data") or [])
            for value, response in zip(values, responses)
        }
        logger.debug(f"Counted {table} by {field}: {counts}")
        return counts
