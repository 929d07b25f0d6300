# =============================================================================
# core/models/task.py - Task Schemas
# =============================================================================
# These models define the API contract for task operations:
# - TaskStatus / TaskPriority / TaskCategory: fixed enumerations
# - TaskCreate: Input for creating a task (title required)
# - TaskUpdate: Partial update; only fields that were sent are forwarded
#
# The service layer works on plain dicts. These schemas only validate at
# the HTTP boundary.
# =============================================================================

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


# Columns returned by task reads
TASK_FIELDS = [
    "Id",
    "Name",
    "title",
    "description",
    "status",
    "priority",
    "due_date",
    "assigned_to",
    "category",
    "CreatedOn",
    "CreatedBy",
    "ModifiedOn",
]


class TaskStatus(str, Enum):
    """
    Workflow state of a task.

    Flow: To Do -> In Progress -> Done
    """
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class TaskPriority(str, Enum):
    """Task priority levels."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TaskCategory(str, Enum):
    """Task grouping used for filtering."""
    WORK = "Work"
    PERSONAL = "Personal"
    LEARNING = "Learning"
    OTHER = "Other"


def require_text(value: str | None) -> str:
    """Strip a required text field and reject blank or null values."""
    if value is None:
        raise ValueError("must not be null")
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class TaskCreate(BaseModel):
    """
    Schema for creating a task.

    Example:
        {
            "title": "Write report",
            "status": "To Do",
            "priority": "Medium",
            "due_date": "2024-02-01",
            "category": "Work"
        }
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Short task title"
    )

    description: str | None = Field(
        default=None,
        description="Optional free-text description"
    )

    status: TaskStatus = Field(
        default=TaskStatus.TODO,
        description="Workflow state"
    )

    priority: TaskPriority = Field(
        default=TaskPriority.MEDIUM,
        description="Priority level"
    )

    due_date: date | None = Field(
        default=None,
        description="Optional due date"
    )

    category: TaskCategory = Field(
        default=TaskCategory.WORK,
        description="Task category"
    )

    assigned_to: str | None = Field(
        default=None,
        description="Optional assignee identifier"
    )

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str | None) -> str:
        return require_text(value)

    def to_record(self) -> dict[str, Any]:
        """Convert to a backend record, dropping unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)


class TaskUpdate(BaseModel):
    """
    Schema for updating a task.

    Every field is optional. Only fields present in the request body are
    sent to the backend.

    Example:
        {"status": "Done"}
    """

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None
    category: TaskCategory | None = None
    assigned_to: str | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str | None) -> str:
        return require_text(value)

    def to_record(self) -> dict[str, Any]:
        """Convert to a partial backend record of the fields that were set."""
        return self.model_dump(mode="json", exclude_unset=True)
