# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Following the principle: "Errors should tell HOW to fix, not just WHAT failed."
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class TaskFlowException(Exception):
    """
    Base exception for the TaskFlow API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "TASKFLOW_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Record Exceptions
# =============================================================================

class TaskNotFoundError(TaskFlowException):
    """Raised when a task Id doesn't exist."""

    def __init__(self, task_id: str):
        super().__init__(
            message=f"Task not found: {task_id}",
            code="TASK_NOT_FOUND",
            status_code=404,
            suggestion="Check that the task id is correct and the task hasn't been deleted",
            details={"task_id": task_id}
        )


class ProjectNotFoundError(TaskFlowException):
    """Raised when a project Id doesn't exist."""

    def __init__(self, project_id: str):
        super().__init__(
            message=f"Project not found: {project_id}",
            code="PROJECT_NOT_FOUND",
            status_code=404,
            suggestion="Check that the project id is correct and the project hasn't been deleted",
            details={"project_id": project_id}
        )


class BackendRequestError(TaskFlowException):
    """
    Raised at the API boundary when a backend call fails.

    Carries only a generic, user-facing message. The underlying error is
    logged where it happens and never sent to the client.
    """

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="BACKEND_ERROR",
            status_code=500,
        )


# =============================================================================
# Local List Exceptions
# =============================================================================

class ListNotFoundError(TaskFlowException):
    """Raised when a local list id doesn't exist."""

    def __init__(self, list_id: str):
        super().__init__(
            message=f"List not found: {list_id}",
            code="LIST_NOT_FOUND",
            status_code=404,
            suggestion="Check that the list id is correct",
            details={"list_id": list_id}
        )


class LocalTaskNotFoundError(TaskFlowException):
    """Raised when a task id doesn't exist in a local list."""

    def __init__(self, list_id: str, task_id: str):
        super().__init__(
            message=f"Task {task_id} not found in list {list_id}",
            code="LOCAL_TASK_NOT_FOUND",
            status_code=404,
            details={"list_id": list_id, "task_id": task_id}
        )


class LastListError(TaskFlowException):
    """Raised when trying to delete the only remaining list."""

    def __init__(self, list_id: str):
        super().__init__(
            message="You must have at least one list",
            code="LAST_LIST",
            status_code=400,
            suggestion="Create another list before deleting this one",
            details={"list_id": list_id}
        )


class BlankNameError(TaskFlowException):
    """Raised when a list name or task title is empty after trimming."""

    def __init__(self, field: str):
        super().__init__(
            message=f"{field} must not be blank",
            code="BLANK_NAME",
            status_code=400,
            suggestion=f"Provide a non-empty {field}",
            details={"field": field}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def taskflow_exception_handler(
    request: Request,
    exc: TaskFlowException
) -> JSONResponse:
    """
    Convert TaskFlowException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
