# =============================================================================
# app/routers/lists.py - Local List Endpoints
# =============================================================================
# Named to-do lists kept in the local key-value store. These lists and their
# tasks are independent of backend task records.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query, status
from pydantic import BaseModel, Field

from app.dependencies import ListServiceDep
from core.models.task_list import LocalPriority, LocalTaskFilter

router = APIRouter()

ListId = Annotated[str, Path(min_length=1, description="Local list id")]
LocalTaskId = Annotated[str, Path(min_length=1, description="Local task id")]


# =============================================================================
# Request Models
# =============================================================================

class ListCreateRequest(BaseModel):
    """Create a list. The new list becomes active."""
    name: str = Field(..., max_length=255, examples=["Groceries"])
    description: str = Field(default="", max_length=1000)


class ActiveListRequest(BaseModel):
    list_id: str = Field(..., min_length=1)


class LocalTaskCreateRequest(BaseModel):
    title: str = Field(..., max_length=255, examples=["Buy milk"])
    description: str = ""
    due_date: str | None = Field(default=None, alias="dueDate")
    priority: LocalPriority = LocalPriority.MEDIUM

    model_config = {"populate_by_name": True}


class LocalTaskUpdateRequest(BaseModel):
    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    due_date: str | None = Field(default=None, alias="dueDate")
    priority: LocalPriority | None = None
    completed: bool | None = None

    model_config = {"populate_by_name": True}


def _dump(model: BaseModel) -> dict:
    return model.model_dump(mode="json", by_alias=True)


# =============================================================================
# Lists
# =============================================================================

@router.get("")
def list_lists(service: ListServiceDep):
    """All lists plus the id of the active one."""
    return {
        "lists": [_dump(item) for item in service.get_lists()],
        "active_list_id": service.get_active_list().id,
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_list(request: ListCreateRequest, service: ListServiceDep):
    return _dump(service.add_list(request.name, request.description))


@router.put("/active")
def set_active_list(request: ActiveListRequest, service: ListServiceDep):
    return _dump(service.set_active_list(request.list_id))


@router.delete("/{list_id}")
def delete_list(list_id: ListId, service: ListServiceDep):
    """Delete a list and its tasks. The last remaining list can't be deleted."""
    service.delete_list(list_id)
    return {
        "list_id": list_id,
        "active_list_id": service.get_active_list().id,
        "message": "List deleted successfully",
    }


# =============================================================================
# Tasks in a list
# =============================================================================

@router.get("/{list_id}/tasks")
def list_local_tasks(
    list_id: ListId,
    service: ListServiceDep,
    task_filter: Annotated[LocalTaskFilter, Query(alias="filter")] = LocalTaskFilter.ALL,
):
    """Tasks of one list (all, active or completed) with list-wide counts."""
    tasks = service.get_tasks(list_id, task_filter)
    return {
        "tasks": [_dump(task) for task in tasks],
        "stats": _dump(service.get_stats(list_id)),
    }


@router.post("/{list_id}/tasks", status_code=status.HTTP_201_CREATED)
def create_local_task(list_id: ListId, request: LocalTaskCreateRequest, service: ListServiceDep):
    task = service.add_task(
        list_id,
        request.title,
        description=request.description,
        due_date=request.due_date,
        priority=request.priority,
    )
    return _dump(task)


@router.patch("/{list_id}/tasks/{task_id}")
def update_local_task(
    list_id: ListId,
    task_id: LocalTaskId,
    request: LocalTaskUpdateRequest,
    service: ListServiceDep,
):
    task = service.update_task(
        list_id,
        task_id,
        title=request.title,
        description=request.description,
        due_date=request.due_date,
        priority=request.priority,
        completed=request.completed,
    )
    return _dump(task)


@router.post("/{list_id}/tasks/{task_id}/toggle")
def toggle_local_task(list_id: ListId, task_id: LocalTaskId, service: ListServiceDep):
    return _dump(service.toggle_task(list_id, task_id))


@router.delete("/{list_id}/tasks/{task_id}")
def delete_local_task(list_id: ListId, task_id: LocalTaskId, service: ListServiceDep):
    service.delete_task(list_id, task_id)
    return {
        "list_id": list_id,
        "task_id": task_id,
        "message": "Task deleted successfully",
    }
