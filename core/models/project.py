# =============================================================================
# core/models/project.py - Project Schemas
# =============================================================================
# These models define the API contract for project operations:
# - ProjectStatus: fixed enumeration used for filtering and statistics
# - ProjectCreate: Input for creating a project (Name required)
# - ProjectUpdate: Partial update
#
# Both schemas reject a start_date later than end_date when both are given.
# =============================================================================

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from .task import require_text


# Columns returned by project reads
PROJECT_FIELDS = [
    "Id",
    "Name",
    "description",
    "status",
    "start_date",
    "end_date",
    "team_members",
    "CreatedOn",
    "CreatedBy",
    "ModifiedOn",
]


class ProjectStatus(str, Enum):
    """
    Lifecycle state of a project.

    Flow: Not Started -> In Progress -> Completed
    """
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class _ProjectDates(BaseModel):
    start_date: date | None = None
    end_date: date | None = None

    @model_validator(mode="after")
    def check_date_order(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must be on or before end_date")
        return self


class ProjectCreate(_ProjectDates):
    """
    Schema for creating a project.

    Example:
        {
            "Name": "Website relaunch",
            "status": "Not Started",
            "start_date": "2024-01-01",
            "end_date": "2024-03-31",
            "team_members": ["alice", "bob"]
        }
    """

    Name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Project name"
    )

    description: str | None = Field(
        default=None,
        description="Optional free-text description"
    )

    status: ProjectStatus = Field(
        default=ProjectStatus.NOT_STARTED,
        description="Lifecycle state"
    )

    # Ordered; not checked against existing users or task assignees
    team_members: list[str] = Field(
        default_factory=list,
        description="Member identifiers"
    )

    @field_validator("Name")
    @classmethod
    def name_not_blank(cls, value: str | None) -> str:
        return require_text(value)

    def to_record(self) -> dict[str, Any]:
        """Convert to a backend record, dropping unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)


class ProjectUpdate(_ProjectDates):
    """
    Schema for updating a project.

    Only fields present in the request body are sent to the backend.
    The date order check only applies when both dates are in the body.
    """

    Name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    status: ProjectStatus | None = None
    team_members: list[str] | None = None

    @field_validator("Name")
    @classmethod
    def name_not_blank(cls, value: str | None) -> str:
        return require_text(value)

    def to_record(self) -> dict[str, Any]:
        """Convert to a partial backend record of the fields that were set."""
        return self.model_dump(mode="json", exclude_unset=True)
