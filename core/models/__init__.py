# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - query.py: QueryDescriptor and its parts (filters, paging, ordering)
# - task.py: Task enums and create/update schemas
# - project.py: Project enums and create/update schemas
# - task_list.py: Local list and local task schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Query Models - Read request parameters
# -----------------------------------------------------------------------------
from .query import (
    FilterOperator,
    OrderBy,
    PagingInfo,
    QueryDescriptor,
    QueryFilter,
    SortDirection,
)

# -----------------------------------------------------------------------------
# Task Models
# -----------------------------------------------------------------------------
from .task import (
    TASK_FIELDS,
    TaskCategory,
    TaskCreate,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
)

# -----------------------------------------------------------------------------
# Project Models
# -----------------------------------------------------------------------------
from .project import (
    PROJECT_FIELDS,
    ProjectCreate,
    ProjectStatus,
    ProjectUpdate,
)

# -----------------------------------------------------------------------------
# Local List Models
# -----------------------------------------------------------------------------
from .task_list import (
    LocalPriority,
    LocalTask,
    LocalTaskFilter,
    LocalTaskList,
    LocalTaskStats,
)

__all__ = [
    # Query
    "FilterOperator",
    "OrderBy",
    "PagingInfo",
    "QueryDescriptor",
    "QueryFilter",
    "SortDirection",
    # Task
    "TASK_FIELDS",
    "TaskCategory",
    "TaskCreate",
    "TaskPriority",
    "TaskStatus",
    "TaskUpdate",
    # Project
    "PROJECT_FIELDS",
    "ProjectCreate",
    "ProjectStatus",
    "ProjectUpdate",
    # Local lists
    "LocalPriority",
    "LocalTask",
    "LocalTaskFilter",
    "LocalTaskList",
    "LocalTaskStats",
]
