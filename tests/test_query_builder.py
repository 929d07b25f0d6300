# =============================================================================
# tests/test_query_builder.py - Entity Query Builder Tests
# =============================================================================
# Covers filter mapping, paging math, ordering and the search predicate.
# =============================================================================

import pytest

from core.models.query import FilterOperator, SortDirection
from core.models.task import TASK_FIELDS
from core.services.query_builder import EntityQueryBuilder


@pytest.fixture
def builder():
    return EntityQueryBuilder(TASK_FIELDS, id_field="Id", search_field="title")


class TestBuildFilters:
    """Every filters entry becomes one Equal predicate."""

    def test_one_predicate_per_entry(self, builder):
        filters = {"status": "Done", "priority": "High", "category": "Work"}

        predicates = builder.build_filters(filters)

        assert len(predicates) == len(filters)
        assert [(p.field, p.value) for p in predicates] == list(filters.items())
        assert all(p.operator == FilterOperator.EQUAL for p in predicates)

    def test_empty_filters(self, builder):
        assert builder.build_filters({}) == []


class TestBuildQuery:
    """Paging, ordering and search handling."""

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 10), (3, 7), (12, 250)])
    def test_offset_is_page_times_limit(self, builder, page, limit):
        query = builder.build_query({}, page, limit)

        assert query.paging_info.offset == page * limit
        assert query.paging_info.limit == limit

    def test_single_order_by(self, builder):
        query = builder.build_query({}, 0, 10, "due_date", "desc")

        assert len(query.order_by) == 1
        assert query.order_by[0].field == "due_date"
        assert query.order_by[0].direction == SortDirection.DESC

    def test_fields_and_filters(self, builder):
        query = builder.build_query({"status": "Done"}, 0, 10, "due_date", SortDirection.ASC)

        assert query.fields == TASK_FIELDS
        assert len(query.filters) == 1
        assert query.filters[0].field == "status"
        assert query.filters[0].value == "Done"

    def test_no_filters_when_none_given(self, builder):
        query = builder.build_query(None)
        assert query.filters == []

    def test_search_adds_contains_predicate(self, builder):
        query = builder.build_query({"status": "Done"}, search="  report ")

        equal = [p for p in query.filters if p.operator == FilterOperator.EQUAL]
        contains = [p for p in query.filters if p.operator == FilterOperator.CONTAINS]
        assert len(equal) == 1
        assert len(contains) == 1
        assert contains[0].field == "title"
        assert contains[0].value == "report"

    def test_blank_search_ignored(self, builder):
        query = builder.build_query({}, search="   ")
        assert query.filters == []

    def test_search_without_search_field(self):
        builder = EntityQueryBuilder(["Id"])
        with pytest.raises(ValueError):
            builder.build_query({}, search="x")

    def test_no_upper_bound_on_limit(self, builder):
        query = builder.build_query({}, 0, 100_000)
        assert query.paging_info.limit == 100_000

    @pytest.mark.parametrize("page,limit", [(-1, 10), (0, 0), (0, -5)])
    def test_invalid_paging_rejected(self, builder, page, limit):
        with pytest.raises(ValueError):
            builder.build_query({}, page, limit)

    def test_invalid_direction_rejected(self, builder):
        with pytest.raises(ValueError):
            builder.build_query({}, 0, 10, "due_date", "sideways")


class TestSingleRecordQueries:
    """Id lookups and count queries."""

    def test_id_query(self, builder):
        query = builder.build_id_query(7)

        assert query.paging_info is None
        assert len(query.filters) == 1
        assert query.filters[0].field == "Id"
        assert query.filters[0].value == 7

    def test_id_query_normalizes_numeric_strings(self, builder):
        query = builder.build_id_query("42")
        assert query.filters[0].value == 42

    def test_count_query_selects_only_id(self, builder):
        query = builder.build_count_query("status", "Done")

        assert query.fields == ["Id"]
        assert query.filters[0].field == "status"
        assert query.filters[0].value == "Done"
