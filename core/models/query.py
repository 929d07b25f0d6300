# =============================================================================
# core/models/query.py - Query Descriptor Schemas
# =============================================================================
# A QueryDescriptor is the parameter object sent with every read request:
# - fields: which columns to return
# - filters: predicates (Equal for exact matches, Contains for search)
# - paging_info: offset/limit window
# - order_by: sort column and direction
#
# Descriptors are built fresh per call by EntityQueryBuilder and never stored.
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class FilterOperator(str, Enum):
    """
    Supported filter predicates.

    - Equal: exact match on a field value
    - Contains: case-insensitive substring match (search only)
    """
    EQUAL = "Equal"
    CONTAINS = "Contains"


class SortDirection(str, Enum):
    """Sort direction for a single order-by column."""
    ASC = "asc"
    DESC = "desc"


class QueryFilter(BaseModel):
    """One predicate applied to a read request."""

    field: str = Field(..., min_length=1)
    operator: FilterOperator = FilterOperator.EQUAL
    value: Any = None


class PagingInfo(BaseModel):
    """
    Offset/limit paging window.

    No upper bound is enforced on limit.
    """

    limit: int = Field(..., gt=0)
    offset: int = Field(default=0, ge=0)


class OrderBy(BaseModel):
    """Sort column and direction."""

    field: str = Field(..., min_length=1)
    direction: SortDirection = SortDirection.ASC


class QueryDescriptor(BaseModel):
    """
    Parameters for one read request against a record table.

    Example:
        {
            "fields": ["Id", "title", "status"],
            "filters": [{"field": "status", "operator": "Equal", "value": "Done"}],
            "paging_info": {"limit": 10, "offset": 20},
            "order_by": [{"field": "due_date", "direction": "asc"}]
        }
    """

    fields: list[str] = Field(default_factory=list)
    filters: list[QueryFilter] = Field(default_factory=list)
    paging_info: PagingInfo | None = None
    order_by: list[OrderBy] = Field(default_factory=list)
