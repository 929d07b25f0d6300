# =============================================================================
# app/routers/tasks.py - Task CRUD Endpoints
# =============================================================================
# List, read, create, update and delete tasks, plus task statistics.
# All endpoints require authentication.
#
# Backend failures are logged and answered with one generic message per
# action; error details never reach the client.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AuthUser, get_current_user
from app.config import settings
from app.dependencies import TaskServiceDep
from app.exceptions import BackendRequestError, TaskNotFoundError
from core.models.query import SortDirection
from core.models.task import TaskCategory, TaskCreate, TaskPriority, TaskStatus, TaskUpdate
from lib.record_client import RecordClientError

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_user)])

TaskId = Annotated[str, Path(min_length=1, description="Task Id")]


@router.get("")
def list_tasks(
    service: TaskServiceDep,
    page: Annotated[int, Query(ge=0, description="Page number (0-indexed)")] = 0,
    limit: Annotated[int, Query(ge=1, description="Items per page")] = settings.DEFAULT_PAGE_SIZE,
    sort_field: Annotated[str, Query(min_length=1, description="Column to sort by")] = "due_date",
    sort_direction: Annotated[SortDirection, Query(description="asc or desc")] = SortDirection.ASC,
    status_filter: Annotated[TaskStatus | None, Query(alias="status")] = None,
    priority: Annotated[TaskPriority | None, Query()] = None,
    category: Annotated[TaskCategory | None, Query()] = None,
    search: Annotated[str | None, Query(description="Substring match on title")] = None,
):
    """
    List tasks with pagination, sorting and filters.

    status/priority/category are exact matches; search is a
    case-insensitive substring match on the title.
    """
    filters = {
        field: value.value
        for field, value in (
            ("status", status_filter),
            ("priority", priority),
            ("category", category),
        )
        if value is not None
    }

    try:
        result = service.get_tasks(filters, page, limit, sort_field, sort_direction, search=search)
    except Exception as e:
        logger.error(f"Error loading tasks: {e}")
        raise BackendRequestError("Failed to load tasks. Please try again later.")

    return {
        "data": result["data"],
        "total": result["total"],
        "page": page,
        "limit": limit,
    }


@router.get("/statistics")
def task_statistics(service: TaskServiceDep):
    """Task counts by status and by priority."""
    try:
        return service.get_task_statistics()
    except Exception as e:
        logger.error(f"Error loading task statistics: {e}")
        raise BackendRequestError("Failed to load task statistics. Please try again later.")


@router.get("/{task_id}")
def get_task(task_id: TaskId, service: TaskServiceDep):
    try:
        task = service.get_task_by_id(task_id)
    except Exception as e:
        logger.error(f"Error loading task {task_id}: {e}")
        raise BackendRequestError("Failed to load task details")

    if task is None:
        raise TaskNotFoundError(task_id)
    return task


@router.post("", status_code=status.HTTP_201_CREATED)
def create_task(
    request: TaskCreate,
    service: TaskServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Create a task. Returns the stored record with its Id."""
    try:
        task = service.create_task(request.to_record())
    except Exception as e:
        logger.error(f"Error saving task for user {user.id}: {e}")
        raise BackendRequestError("Failed to save task. Please try again.")

    return task


@router.patch("/{task_id}")
def update_task(task_id: TaskId, request: TaskUpdate, service: TaskServiceDep):
    """Update the fields present in the body. Last write wins."""
    try:
        return service.update_task(task_id, request.to_record())
    except RecordClientError as e:
        if e.code == "RECORD_NOT_FOUND":
            raise TaskNotFoundError(task_id)
        logger.error(f"Error saving task {task_id}: {e}")
        raise BackendRequestError("Failed to save task. Please try again.")
    except Exception as e:
        logger.error(f"Error saving task {task_id}: {e}")
        raise BackendRequestError("Failed to save task. Please try again.")


@router.delete("/{task_id}")
def delete_task(task_id: TaskId, service: TaskServiceDep):
    try:
        deleted = service.delete_task(task_id)
    except Exception as e:
        logger.error(f"Error deleting task {task_id}: {e}")
        raise BackendRequestError("Failed to delete task. Please try again later.")

    return {
        "task_id": task_id,
        "deleted": deleted,
        "message": "Task deleted successfully",
    }
