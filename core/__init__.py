# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for query descriptors, tasks, projects, lists
# - services/: Query building, CRUD facades, statistics, local lists
#
# Code in this package should NOT import from FastAPI routers.
# This keeps the logic testable and reusable.
# =============================================================================
