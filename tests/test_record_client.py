# =============================================================================
# tests/test_record_client.py - Record Client Adapter Tests
# =============================================================================
# This module contains tests for:
# - Descriptor -> PostgREST builder translation (against FakeSupabase)
# - Error propagation (original exceptions re-raised unchanged)
# - Lazy shared client initialization
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest

from core.models.query import (
    FilterOperator,
    OrderBy,
    PagingInfo,
    QueryDescriptor,
    QueryFilter,
    SortDirection,
)
from lib.record_client import RecordClient, RecordClientError, escape_like


# =============================================================================
# Reads
# =============================================================================

class TestFetchRecords:
    """Test fetch_records translation."""

    def test_empty_table(self, record_client):
        result = record_client.fetch_records("task6", QueryDescriptor())
        assert result == {"data": [], "total": 0}

    def test_equal_filter_and_total(self, record_client, fake_backend, sample_tasks):
        fake_backend.seed("task6", sample_tasks)
        query = QueryDescriptor(
            fields=["Id", "title"],
            filters=[QueryFilter(field="status", value="Done")],
        )

        result = record_client.fetch_records("task6", query)

        assert result["total"] == 2
        assert {row["title"] for row in result["data"]} == {"Gym", "Read book"}
        assert set(result["data"][0]) == {"Id", "title"}

    def test_paging_window_and_total(self, record_client, fake_backend, sample_tasks):
        fake_backend.seed("task6", sample_tasks)
        query = QueryDescriptor(
            paging_info=PagingInfo(limit=2, offset=2),
            order_by=[OrderBy(field="due_date", direction=SortDirection.ASC)],
        )

        result = record_client.fetch_records("task6", query)

        # Sorted by due_date: Review, Gym, Write, Read -> page 2 is Write, Read
        assert [row["title"] for row in result["data"]] == ["Write report", "Read book"]
        assert result["total"] == 4

    def test_descending_order(self, record_client, fake_backend, sample_tasks):
        fake_backend.seed("task6", sample_tasks)
        query = QueryDescriptor(order_by=[OrderBy(field="due_date", direction=SortDirection.DESC)])

        result = record_client.fetch_records("task6", query)

        assert result["data"][0]["title"] == "Read book"

    def test_contains_filter_is_case_insensitive(self, record_client, fake_backend, sample_tasks):
        fake_backend.seed("task6", sample_tasks)
        query = QueryDescriptor(
            filters=[QueryFilter(field="title", operator=FilterOperator.CONTAINS, value="REPORT")]
        )

        result = record_client.fetch_records("task6", query)

        assert {row["title"] for row in result["data"]} == {"Write report", "Review report"}

    def test_builder_calls(self):
        """Each descriptor part maps to the matching builder call."""
        builder = MagicMock()
        builder.select.return_value = builder
        builder.eq.return_value = builder
        builder.ilike.return_value = builder
        builder.order.return_value = builder
        builder.range.return_value = builder
        builder.execute.return_value = MagicMock(data=[{"Id": 1}], count=11)
        client = MagicMock()
        client.table.return_value = builder

        query = QueryDescriptor(
            fields=["Id", "title"],
            filters=[
                QueryFilter(field="status", value="Done"),
                QueryFilter(field="title", operator=FilterOperator.CONTAINS, value="report"),
            ],
            paging_info=PagingInfo(limit=10, offset=20),
            order_by=[OrderBy(field="due_date", direction=SortDirection.DESC)],
        )

        result = RecordClient(client=client).fetch_records("task6", query)

        client.table.assert_called_once_with("task6")
        builder.select.assert_called_once_with("Id,title", count="exact")
        builder.eq.assert_called_once_with("status", "Done")
        builder.ilike.assert_called_once_with("title", "%report%")
        builder.order.assert_called_once_with("due_date", desc=True)
        builder.range.assert_called_once_with(20, 29)
        assert result == {"data": [{"Id": 1}], "total": 11}

    def test_total_falls_back_to_data_length(self):
        client = MagicMock()
        client.table.return_value.select.return_value.execute.return_value = MagicMock(
            data=[{"Id": 1}, {"Id": 2}], count=None
        )

        result = RecordClient(client=client).fetch_records("task6", QueryDescriptor())

        assert result["total"] == 2


# =============================================================================
# Writes
# =============================================================================

class TestWrites:
    """Test create/update/delete."""

    def test_create_returns_row_with_id(self, record_client):
        created = record_client.create_record("task6", {"title": "Write report"})

        assert created["Id"] == 1
        assert created["title"] == "Write report"
        assert "CreatedOn" in created

    def test_create_twice_creates_two_rows(self, record_client, fake_backend):
        record_client.create_record("task6", {"title": "Same"})
        record_client.create_record("task6", {"title": "Same"})

        assert len(fake_backend.tables["task6"]) == 2

    def test_create_without_returned_row(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.return_value = MagicMock(data=[])

        with pytest.raises(RecordClientError) as exc_info:
            RecordClient(client=client).create_record("task6", {"title": "x"})

        assert exc_info.value.code == "INSERT_NO_DATA"

    def test_update_existing(self, record_client):
        created = record_client.create_record("task6", {"title": "Draft", "status": "To Do"})

        updated = record_client.update_record("task6", created["Id"], {"status": "Done"})

        assert updated["status"] == "Done"
        assert updated["title"] == "Draft"

    def test_update_accepts_string_id(self, record_client):
        created = record_client.create_record("task6", {"title": "Draft"})

        updated = record_client.update_record("task6", str(created["Id"]), {"title": "Final"})

        assert updated["title"] == "Final"

    def test_update_missing_record(self, record_client):
        with pytest.raises(RecordClientError) as exc_info:
            record_client.update_record("task6", 999, {"status": "Done"})

        assert exc_info.value.code == "RECORD_NOT_FOUND"

    def test_delete_returns_removed_row(self, record_client, fake_backend):
        created = record_client.create_record("task6", {"title": "Temp"})

        deleted = record_client.delete_record("task6", created["Id"])

        assert deleted["title"] == "Temp"
        assert fake_backend.tables["task6"] == []

    def test_delete_missing_returns_none(self, record_client):
        assert record_client.delete_record("task6", 12345) is None


# =============================================================================
# Error handling
# =============================================================================

class TestErrors:
    """Backend errors pass through unchanged."""

    @pytest.mark.parametrize(
        "call",
        [
            lambda rc: rc.fetch_records("task6", QueryDescriptor()),
            lambda rc: rc.create_record("task6", {"title": "x"}),
            lambda rc: rc.update_record("task6", 1, {"title": "x"}),
            lambda rc: rc.delete_record("task6", 1),
        ],
    )
    def test_backend_error_reraised_unchanged(self, record_client, fake_backend, call):
        error = ConnectionError("network down")
        fake_backend.error = error

        with pytest.raises(ConnectionError) as exc_info:
            call(record_client)

        assert exc_info.value is error

    def test_backend_error_is_logged(self, record_client, fake_backend, caplog):
        fake_backend.error = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            record_client.delete_record("task6", 5)

        assert "Error deleting record 5 from task6" in caplog.text

    @pytest.mark.parametrize("table", ["", "   "])
    def test_invalid_table(self, record_client, table):
        with pytest.raises(RecordClientError) as exc_info:
            record_client.fetch_records(table, QueryDescriptor())

        assert exc_info.value.code == "INVALID_TABLE"


# =============================================================================
# Shared client
# =============================================================================

class TestSharedClient:
    """Lazy, process-wide backend initialization."""

    @pytest.fixture(autouse=True)
    def reset_shared_client(self):
        RecordClient.reset_backend()
        yield
        RecordClient.reset_backend()

    def test_created_once_and_reused(self):
        with patch("lib.record_client.create_client") as mock_create:
            mock_create.return_value = MagicMock()

            first = RecordClient().get_client()
            second = RecordClient().get_client()

        mock_create.assert_called_once_with(
            "https://test-project.supabase.co", "test-service-key"
        )
        assert first is second

    def test_recreated_after_reset(self):
        with patch("lib.record_client.create_client") as mock_create:
            mock_create.side_effect = [MagicMock(), MagicMock()]

            first = RecordClient.get_backend()
            RecordClient.reset_backend()
            second = RecordClient.get_backend()

        assert first is not second
        assert mock_create.call_count == 2

    def test_injected_client_skips_shared(self, fake_backend):
        with patch("lib.record_client.create_client") as mock_create:
            assert RecordClient(client=fake_backend).get_client() is fake_backend

        mock_create.assert_not_called()

    def test_init_failure(self):
        with patch("lib.record_client.create_client", side_effect=Exception("bad url")):
            with pytest.raises(RecordClientError) as exc_info:
                RecordClient.get_backend()

        assert exc_info.value.code == "CLIENT_INIT_FAILED"


# =============================================================================
# Search patterns
# =============================================================================

class TestSearchEscaping:
    """User search text is matched literally, not as LIKE wildcards."""

    @pytest.mark.parametrize(
        "raw, escaped",
        [
            ("report", "report"),
            ("50%", "50\\%"),
            ("a_b", "a\\_b"),
            ("C:\\tmp", "C:\\\\tmp"),
            ("\\%", "\\\\\\%"),
        ],
    )
    def test_escape_like(self, raw, escaped):
        assert escape_like(raw) == escaped

    def test_wildcards_escaped_in_pattern(self):
        client = MagicMock()
        builder = client.table.return_value.select.return_value
        builder.ilike.return_value = builder
        builder.execute.return_value = MagicMock(data=[], count=0)

        query = QueryDescriptor(
            filters=[QueryFilter(field="title", operator=FilterOperator.CONTAINS, value="50%_off")]
        )
        RecordClient(client=client).fetch_records("task6", query)

        builder.ilike.assert_called_once_with("title", "%50\\%\\_off%")

    def test_percent_matches_literally(self, record_client, fake_backend):
        fake_backend.seed("task6", [{"title": "50% done"}, {"title": "500 done"}])
        query = QueryDescriptor(
            filters=[QueryFilter(field="title", operator=FilterOperator.CONTAINS, value="50%")]
        )

        result = record_client.fetch_records("task6", query)

        assert [row["title"] for row in result["data"]] == ["50% done"]
