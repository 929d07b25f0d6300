# =============================================================================
# lib/record_client.py - Backend Record Client Adapter
# =============================================================================
# This module wraps the Supabase client behind four table-level operations:
# - fetch_records: read with a QueryDescriptor (fields, filters, paging, order)
# - create_record: insert one record
# - update_record: patch one record by Id
# - delete_record: remove one record by Id
#
# The Supabase client itself is created lazily, once per process, and reused.
# Services can inject their own client (or a test double) instead.
#
# Failures are logged with operation/table/id context and re-raised unchanged.
# Nothing is retried.
#
# Usage:
#   from lib.record_client import RecordClient
#   page = RecordClient().fetch_records("task6", descriptor)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings
from core.models.query import FilterOperator, QueryDescriptor, SortDirection
from lib.utils import ApplicationError, normalize_record_id

# Set up logging for this module
logger = logging.getLogger(__name__)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally (backslash first)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class RecordClientError(ApplicationError):
    """Error raised by the adapter itself (not by the backend)."""

    def __init__(self, message: str, code: str = "RECORD_CLIENT_ERROR", **kwargs):
        super().__init__(message, code=code, **kwargs)


class RecordClient:
    """
    Table-level CRUD adapter over a Supabase client.

    Example:
        records = RecordClient()
        page = records.fetch_records("task6", descriptor)
        print(page["total"], len(page["data"]))

        created = records.create_record("task6", {"title": "Write report"})
        records.update_record("task6", created["Id"], {"status": "Done"})
        records.delete_record("task6", created["Id"])
    """

    # Process-wide backend handle shared by every adapter without an injected client
    _instance: Client | None = None

    def __init__(self, client: Client | None = None, id_field: str | None = None):
        self._client = client
        self.id_field = id_field or settings.RECORD_ID_FIELD

    @classmethod
    def get_backend(cls) -> Client:
        """
        Get or create the shared Supabase client.

        Uses the service_role key, which bypasses Row Level Security.

        Raises:
            RecordClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise RecordClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def reset_backend(cls) -> None:
        """Drop the shared client so the next call creates a fresh one."""
        cls._instance = None

    def get_client(self) -> Client:
        """Return the injected client, falling back to the shared one."""
        if self._client is None:
            self._client = RecordClient.get_backend()
        return self._client

    @staticmethod
    def _check_table(table: str) -> None:
        if not isinstance(table, str) or not table.strip():
            raise RecordClientError(
                message=f"Invalid table name: {table!r}",
                code="INVALID_TABLE",
                suggestion="Pass the name of an existing backend table"
            )

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def fetch_records(self, table: str, query: QueryDescriptor) -> dict[str, Any]:
        """
        Fetch records matching a query descriptor.

        Args:
            table: Backend table name
            query: Fields, filters, paging and ordering to apply

        Returns:
            Dict with:
            - data: list of record dicts (one page)
            - total: number of matching records across all pages
        """
        self._check_table(table)

        try:
            builder = self.get_client().table(table).select(
                ",".join(query.fields) if query.fields else "*",
                count="exact",
            )

            for predicate in query.filters:
                if predicate.operator == FilterOperator.CONTAINS:
                    pattern = f"%{escape_like(str(predicate.value))}%"
                    builder = builder.ilike(predicate.field, pattern)
                else:
                    builder = builder.eq(predicate.field, predicate.value)

            for order in query.order_by:
                builder = builder.order(order.field, desc=(order.direction == SortDirection.DESC))

            if query.paging_info is not None:
                start = query.paging_info.offset
                builder = builder.range(start, start + query.paging_info.limit - 1)

            response = builder.execute()

        except Exception as e:
            logger.error(f"Error fetching records from {table}: {e}")
            raise

        data = response.data or []
        total = response.count if response.count is not None else len(data)

        logger.debug(f"Fetched {len(data)} of {total} records from {table}")
        return {"data": data, "total": total}

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create_record(self, table: str, record: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a new record.

        No de-duplication: calling this twice creates two records.

        Returns:
            The inserted record with backend-assigned Id and timestamps

        Raises:
            RecordClientError: If the backend returns no row
        """
        self._check_table(table)

        try:
            response = (
                self.get_client()
                .table(table)
                .insert(record)
                .execute()
            )
        except Exception as e:
            logger.error(f"Error creating record in {table}: {e}")
            raise

        if not response.data:
            logger.error(f"Error creating record in {table}: insert returned no data")
            raise RecordClientError(
                message=f"Insert into {table} returned no data",
                code="INSERT_NO_DATA",
                details={"table": table}
            )

        created = response.data[0]
        logger.info(f"Created record {created.get(self.id_field)} in {table}")
        return created

    def update_record(
        self,
        table: str,
        record_id: int | str,
        record: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Update an existing record by Id.

        Last writer wins; there is no version check.

        Returns:
            The updated record

        Raises:
            RecordClientError: If no record has this Id
        """
        self._check_table(table)
        record_id = normalize_record_id(record_id)

        try:
            response = (
                self.get_client()
                .table(table)
                .update(record)
                .eq(self.id_field, record_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Error updating record {record_id} in {table}: {e}")
            raise

        if not response.data:
            logger.error(f"Error updating record {record_id} in {table}: no matching record")
            raise RecordClientError(
                message=f"Record {record_id} not found in {table}",
                code="RECORD_NOT_FOUND",
                suggestion="Check that the record exists and hasn't been deleted",
                details={"table": table, "record_id": record_id}
            )

        logger.info(f"Updated record {record_id} in {table}")
        return response.data[0]

    def delete_record(self, table: str, record_id: int | str) -> dict[str, Any] | None:
        """
        Delete a record by Id.

        Returns:
            The deleted record, or None if the backend removed nothing
        """
        self._check_table(table)
        record_id = normalize_record_id(record_id)

        try:
            response = (
                self.get_client()
                .table(table)
                .delete()
                .eq(self.id_field, record_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Error deleting record {record_id} from {table}: {e}")
            raise

        logger.info(f"Deleted record {record_id} from {table}")
        return response.data[0] if response.data else None
