# =============================================================================
# core/services/project_service.py - Project Business Logic
# =============================================================================
# Handles project CRUD and status statistics on top of the record client.
# =============================================================================

import logging
from collections.abc import Mapping
from typing import Any

from app.config import settings
from core.models.project import PROJECT_FIELDS, ProjectStatus
from core.models.query import SortDirection
from core.services.query_builder import EntityQueryBuilder
from core.services.statistics_service import StatisticsAggregator
from lib.record_client import RecordClient

logger = logging.getLogger(__name__)


class ProjectService:
    """Service for project operations."""

    def __init__(
        self,
        records: RecordClient | None = None,
        table: str | None = None,
        aggregator: StatisticsAggregator | None = None,
    ):
        self.records = records or RecordClient()
        self.table = table or settings.PROJECT_TABLE
        self.builder = EntityQueryBuilder(
            PROJECT_FIELDS,
            id_field=self.records.id_field,
            search_field="Name",
        )
        self.aggregator = aggregator or StatisticsAggregator(self.records)

    def get_projects(
        self,
        filters: Mapping[str, Any] | None = None,
        page: int = 0,
        limit: int = 10,
        sort_field: str = "start_date",
        sort_direction: SortDirection | str = SortDirection.ASC,
        search: str | None = None,
    ) -> dict[str, Any]:
        """
        List projects with equality filters, paging and sorting.

        Returns:
            Dict with "data" (list of projects) and "total" (match count)
        """
        query = self.builder.build_query(
            filters, page, limit, sort_field, sort_direction, search=search
        )

        try:
            return self.records.fetch_records(self.table, query)
        except Exception as e:
            logger.error(f"Error fetching projects: {e}")
            raise

    def get_project_by_id(self, project_id: int | str) -> dict[str, Any] | None:
        """Get a project by Id, or None if it doesn't exist."""
        query = self.builder.build_id_query(project_id)

        try:
            response = self.records.fetch_records(self.table, query)
        except Exception as e:
            logger.error(f"Error fetching project {project_id}: {e}")
            raise

        data = response.get("data") or []
        return data[0] if data else None

    def create_project(self, project_data: Mapping[str, Any]) -> dict[str, Any]:
        # team_members is stored as given; members aren't checked against anything
        try:
            project = self.records.create_record(self.table, dict(project_data))
        except Exception as e:
            logger.error(f"Error creating project: {e}")
            raise

        logger.info(f"Created project: {project.get(self.builder.id_field)}")
        return project

    def update_project(
        self,
        project_id: int | str,
        project_data: Mapping[str, Any],
    ) -> dict[str, Any]:
        try:
            return self.records.update_record(self.table, project_id, dict(project_data))
        except Exception as e:
            logger.error(f"Error updating project {project_id}: {e}")
            raise

    def delete_project(self, project_id: int | str) -> dict[str, Any] | None:
        """Delete a project. Tasks referring to it are left untouched."""
        try:
            return self.records.delete_record(self.table, project_id)
        except Exception as e:
            logger.error(f"Error deleting project {project_id}: {e}")
            raise

    def get_project_statistics(self) -> dict[str, dict[str, int]]:
        """
        Count projects by status.

        Returns:
            {"status_counts": {"Not Started": n, "In Progress": n, "Completed": n}}
        """
        try:
            status_counts = self.aggregator.count_by(
                self.table, self.builder, "status", [s.value for s in ProjectStatus]
            )
        except Exception as e:
            logger.error(f"Error fetching project statistics: {e}")
            raise

        return {"status_counts": status_counts}
