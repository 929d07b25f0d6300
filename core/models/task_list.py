# =============================================================================
# core/models/task_list.py - Local List Schemas
# =============================================================================
# Models for the local list feature. These records live in the local
# key-value store only and are unrelated to backend task records:
# - LocalTaskList: a named list of local tasks
# - LocalTask: one to-do item inside a list
# - LocalTaskFilter: which tasks of a list to show
#
# Stored JSON keeps camelCase keys (createdAt, dueDate, listId).
# =============================================================================

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LocalPriority(str, Enum):
    """Priority of a local task (lowercase, unlike backend tasks)."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class LocalTaskFilter(str, Enum):
    """
    Visibility filter for a list's tasks.

    - all: every task
    - active: tasks not yet completed
    - completed: finished tasks
    """
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class LocalTaskList(BaseModel):
    """A named list of local tasks."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str = ""
    created_at: str | None = Field(default=None, alias="createdAt")


class LocalTask(BaseModel):
    """
    One to-do item in a local list.

    Example:
        {
            "id": "task-1705312200000",
            "title": "Buy milk",
            "description": "",
            "completed": false,
            "createdAt": "2024-01-15T10:30:00+00:00",
            "dueDate": null,
            "priority": "medium",
            "listId": "default"
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str = ""
    completed: bool = False
    created_at: str | None = Field(default=None, alias="createdAt")
    due_date: str | None = Field(default=None, alias="dueDate")
    priority: LocalPriority = LocalPriority.MEDIUM
    list_id: str = Field(..., alias="listId")


class LocalTaskStats(BaseModel):
    """Counts shown above a local list."""

    total: int = Field(default=0, ge=0)
    completed: int = Field(default=0, ge=0)
    active: int = Field(default=0, ge=0)
