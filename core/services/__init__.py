# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .query_builder import EntityQueryBuilder
from .statistics_service import StatisticsAggregator
from .task_service import TaskService
from .project_service import ProjectService
from .dashboard_service import DashboardService
from .list_service import ListService

__all__ = [
    "EntityQueryBuilder",
    "StatisticsAggregator",
    "TaskService",
    "ProjectService",
    "DashboardService",
    "ListService",
]
