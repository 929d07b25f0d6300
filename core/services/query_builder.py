# =============================================================================
# core/services/query_builder.py - Entity Query Builder
# =============================================================================
# Turns loose list criteria (filters dict, page, limit, sort) into a
# QueryDescriptor for one entity table.
#
# Rules:
# - every filters entry becomes exactly one Equal predicate
# - offset = page * limit (page is 0-indexed)
# - exactly one order-by column
# - search is separate and becomes one Contains predicate on the search field
# =============================================================================

from collections.abc import Mapping
from typing import Any

from core.models.query import (
    FilterOperator,
    OrderBy,
    PagingInfo,
    QueryDescriptor,
    QueryFilter,
    SortDirection,
)
from lib.utils import normalize_record_id


class EntityQueryBuilder:
    """
    Builds read descriptors for one entity.

    Example:
        builder = EntityQueryBuilder(TASK_FIELDS, search_field="title")
        query = builder.build_query({"status": "Done"}, page=2, limit=10)
        # query.paging_info.offset == 20
    """

    def __init__(
        self,
        fields: list[str],
        id_field: str = "Id",
        search_field: str | None = None,
    ):
        self.fields = list(fields)
        self.id_field = id_field
        self.search_field = search_field

    @staticmethod
    def build_filters(filters: Mapping[str, Any]) -> list[QueryFilter]:
        """Map each (field, value) entry to one Equal predicate, in order."""
        return [
            QueryFilter(field=field, operator=FilterOperator.EQUAL, value=value)
            for field, value in filters.items()
        ]

    def build_query(
        self,
        filters: Mapping[str, Any] | None = None,
        page: int = 0,
        limit: int = 10,
        sort_field: str = "Id",
        sort_direction: SortDirection | str = SortDirection.ASC,
        search: str | None = None,
    ) -> QueryDescriptor:
        """
        Build a paged, sorted list query.

        Args:
            filters: Field -> value equality criteria
            page: 0-indexed page number
            limit: Page size (must be > 0, no upper bound)
            sort_field: Column to order by
            sort_direction: "asc" or "desc"
            search: Optional substring to match on the search field

        Raises:
            ValueError: If page < 0, limit <= 0 or sort_direction is unknown
        """
        if page < 0:
            raise ValueError(f"page must be >= 0, got {page}")
        if limit <= 0:
            raise ValueError(f"limit must be > 0, got {limit}")

        predicates = self.build_filters(filters or {})

        if search and search.strip():
            if not self.search_field:
                raise ValueError("This entity has no search field")
            predicates.append(
                QueryFilter(
                    field=self.search_field,
                    operator=FilterOperator.CONTAINS,
                    value=search.strip(),
                )
            )

        return QueryDescriptor(
            fields=self.fields,
            filters=predicates,
            paging_info=PagingInfo(limit=limit, offset=page * limit),
            order_by=[OrderBy(field=sort_field, direction=SortDirection(sort_direction))],
        )

    def build_id_query(self, record_id: Any) -> QueryDescriptor:
        """Build a query selecting one record by Id."""
        return QueryDescriptor(
            fields=self.fields,
            filters=[QueryFilter(field=self.id_field, value=normalize_record_id(record_id))],
        )

    def build_count_query(self, field: str, value: Any) -> QueryDescriptor:
        """Build an Id-only query for records where field == value."""
        return QueryDescriptor(
            fields=[self.id_field],
            filters=[QueryFilter(field=field, value=value)],
        )
