# =============================================================================
# core/services/task_service.py - Task Business Logic
# =============================================================================
# Handles task CRUD and statistics on top of the record client adapter.
# Separates HTTP concerns from backend access.
#
# Every operation logs failures with the task id (when there is one) and
# re-raises the original error. Records are returned as plain dicts.
# =============================================================================

import logging
from collections.abc import Mapping
from typing import Any

from app.config import settings
from core.models.query import SortDirection
from core.models.task import TASK_FIELDS, TaskPriority, TaskStatus
from core.services.query_builder import EntityQueryBuilder
from core.services.statistics_service import StatisticsAggregator
from lib.record_client import RecordClient

logger = logging.getLogger(__name__)


class TaskService:
    """
    Service for task operations.

    The record client is injected so callers (and tests) can swap the
    backend; by default the shared Supabase-backed client is used.
    """

    def __init__(
        self,
        records: RecordClient | None = None,
        table: str | None = None,
        aggregator: StatisticsAggregator | None = None,
    ):
        self.records = records or RecordClient()
        self.table = table or settings.TASK_TABLE
        self.builder = EntityQueryBuilder(
            TASK_FIELDS,
            id_field=self.records.id_field,
            search_field="title",
        )
        self.aggregator = aggregator or StatisticsAggregator(self.records)

    def get_tasks(
        self,
        filters: Mapping[str, Any] | None = None,
        page: int = 0,
        limit: int = 10,
        sort_field: str = "due_date",
        sort_direction: SortDirection | str = SortDirection.ASC,
        search: str | None = None,
    ) -> dict[str, Any]:
        """
        List tasks with equality filters, paging and sorting.

        Args:
            filters: Field -> value criteria, e.g. {"status": "Done"}
            page: Page number (0-indexed)
            limit: Items per page
            sort_field: Column to sort by
            sort_direction: "asc" or "desc"
            search: Optional substring match on title

        Returns:
            Dict with "data" (list of tasks) and "total" (match count)
        """
        query = self.builder.build_query(
            filters, page, limit, sort_field, sort_direction, search=search
        )

        try:
            return self.records.fetch_records(self.table, query)
        except Exception as e:
            logger.error(f"Error fetching tasks: {e}")
            raise

    def get_task_by_id(self, task_id: int | str) -> dict[str, Any] | None:
        """
        Get a task by Id.

        Returns:
            The first matching task, or None if there is none
        """
        query = self.builder.build_id_query(task_id)

        try:
            response = self.records.fetch_records(self.table, query)
        except Exception as e:
            logger.error(f"Error fetching task {task_id}: {e}")
            raise

        data = response.get("data") or []
        return data[0] if data else None

    def create_task(self, task_data: Mapping[str, Any]) -> dict[str, Any]:
        """
        Create a task.

        The full mapping is forwarded as the new record without field
        filtering; validation happens at the API boundary.
        """
        try:
            task = self.records.create_record(self.table, dict(task_data))
        except Exception as e:
            logger.error(f"Error creating task: {e}")
            raise

        logger.info(f"Created task: {task.get(self.builder.id_field)}")
        return task

    def update_task(self, task_id: int | str, task_data: Mapping[str, Any]) -> dict[str, Any]:
        """
        Update a task. Last writer wins.

        Raises:
            Whatever the backend raises, including RecordClientError
            when the Id doesn't exist
        """
        try:
            return self.records.update_record(self.table, task_id, dict(task_data))
        except Exception as e:
            logger.error(f"Error updating task {task_id}: {e}")
            raise

    def delete_task(self, task_id: int | str) -> dict[str, Any] | None:
        """
        Delete a task.

        There is no existence check, so deleting twice returns whatever the
        backend reports the second time.
        """
        try:
            return self.records.delete_record(self.table, task_id)
        except Exception as e:
            logger.error(f"Error deleting task {task_id}: {e}")
            raise

    def get_task_statistics(self) -> dict[str, dict[str, int]]:
        """
        Count tasks by status and by priority.

        Returns:
            {"status_counts": {...}, "priority_counts": {...}}
        """
        try:
            status_counts = self.aggregator.count_by(
                self.table, self.builder, "status", [s.value for s in TaskStatus]
            )
            priority_counts = self.aggregator.count_by(
                self.table, self.builder, "priority", [p.value for p in TaskPriority]
            )
        except Exception as e:
            logger.error(f"Error fetching task statistics: {e}")
            raise

        return {
            "status_counts": status_counts,
            "priority_counts": priority_counts,
        }
