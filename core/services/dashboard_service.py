# =============================================================================
# core/services/dashboard_service.py - Dashboard Summary
# =============================================================================
# Gathers everything the dashboard shows in one call:
# - task statistics (by status and priority)
# - project statistics (by status)
# - the most recently created tasks and projects
# =============================================================================

import logging
from typing import Any

from core.models.query import SortDirection
from core.services.project_service import ProjectService
from core.services.task_service import TaskService

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


class DashboardService:
    """Builds the dashboard summary from the task and project services."""

    def __init__(self, tasks: TaskService, projects: ProjectService):
        self.tasks = tasks
        self.projects = projects

    def get_summary(self, recent_limit: int = RECENT_LIMIT) -> dict[str, Any]:
        """
        Fetch statistics and recent records.

        Any failing call fails the whole summary.

        Returns:
            {
                "task_stats": {"status_counts": ..., "priority_counts": ...},
                "project_stats": {"status_counts": ...},
                "recent_tasks": [...],
                "recent_projects": [...]
            }
        """
        try:
            task_stats = self.tasks.get_task_statistics()
            project_stats = self.projects.get_project_statistics()
            recent_tasks = self.tasks.get_tasks(
                {}, 0, recent_limit, "CreatedOn", SortDirection.DESC
            )
            recent_projects = self.projects.get_projects(
                {}, 0, recent_limit, "CreatedOn", SortDirection.DESC
            )
        except Exception as e:
            logger.error(f"Error fetching dashboard data: {e}")
            raise

        return {
            "task_stats": task_stats,
            "project_stats": project_stats,
            "recent_tasks": recent_tasks.get("data") or [],
            "recent_projects": recent_projects.get("data") or [],
        }
