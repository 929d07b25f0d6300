# =============================================================================
# app/routers/projects.py - Project CRUD Endpoints
# =============================================================================
# List, read, create, update and delete projects, plus status statistics.
# All endpoints require authentication.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import get_current_user
from app.config import settings
from app.dependencies import ProjectServiceDep
from app.exceptions import BackendRequestError, ProjectNotFoundError
from core.models.project import ProjectCreate, ProjectStatus, ProjectUpdate
from core.models.query import SortDirection
from lib.record_client import RecordClientError

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_user)])

ProjectId = Annotated[str, Path(min_length=1, description="Project Id")]


@router.get("")
def list_projects(
    service: ProjectServiceDep,
    page: Annotated[int, Query(ge=0, description="Page number (0-indexed)")] = 0,
    limit: Annotated[int, Query(ge=1, description="Items per page")] = settings.DEFAULT_PAGE_SIZE,
    sort_field: Annotated[str, Query(min_length=1)] = "start_date",
    sort_direction: Annotated[SortDirection, Query()] = SortDirection.ASC,
    status_filter: Annotated[ProjectStatus | None, Query(alias="status")] = None,
    search: Annotated[str | None, Query(description="Substring match on Name")] = None,
):
    """List projects with pagination, sorting and an optional status filter."""
    filters = {"status": status_filter.value} if status_filter else {}

    try:
        result = service.get_projects(filters, page, limit, sort_field, sort_direction, search=search)
    except Exception as e:
        logger.error(f"Error loading projects: {e}")
        raise BackendRequestError("Failed to load projects. Please try again later.")

    return {
        "data": result["data"],
        "total": result["total"],
        "page": page,
        "limit": limit,
    }


@router.get("/statistics")
def project_statistics(service: ProjectServiceDep):
    """Project counts by status."""
    try:
        return service.get_project_statistics()
    except Exception as e:
        logger.error(f"Error loading project statistics: {e}")
        raise BackendRequestError("Failed to load project statistics. Please try again later.")


@router.get("/{project_id}")
def get_project(project_id: ProjectId, service: ProjectServiceDep):
    try:
        project = service.get_project_by_id(project_id)
    except Exception as e:
        logger.error(f"Error loading project {project_id}: {e}")
        raise BackendRequestError("Failed to load project details")

    if project is None:
        raise ProjectNotFoundError(project_id)
    return project


@router.post("", status_code=status.HTTP_201_CREATED)
def create_project(request: ProjectCreate, service: ProjectServiceDep):
    try:
        return service.create_project(request.to_record())
    except Exception as e:
        logger.error(f"Error saving project: {e}")
        raise BackendRequestError("Failed to save project. Please try again.")


@router.patch("/{project_id}")
def update_project(project_id: ProjectId, request: ProjectUpdate, service: ProjectServiceDep):
    try:
        return service.update_project(project_id, request.to_record())
    except RecordClientError as e:
        if e.code == "RECORD_NOT_FOUND":
            raise ProjectNotFoundError(project_id)
        logger.error(f"Error saving project {project_id}: {e}")
        raise BackendRequestError("Failed to save project. Please try again.")
    except Exception as e:
        logger.error(f"Error saving project {project_id}: {e}")
        raise BackendRequestError("Failed to save project. Please try again.")


@router.delete("/{project_id}")
def delete_project(project_id: ProjectId, service: ProjectServiceDep):
    try:
        deleted = service.delete_project(project_id)
    except Exception as e:
        logger.error(f"Error deleting project {project_id}: {e}")
        raise BackendRequestError("Failed to delete project. Please try again later.")

    return {
        "project_id": project_id,
        "deleted": deleted,
        "message": "Project deleted successfully",
    }
