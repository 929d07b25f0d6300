# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from typing import Any
from uuid import UUID


# =============================================================================
# Record ID Utilities
# =============================================================================

def normalize_record_id(value: int | str | UUID) -> int | str:
    """
    Normalize a record ID for backend filters.

    Numeric strings become ints so they compare equal to integer primary
    keys; UUIDs become strings; everything else passes through.

    Example:
        normalize_record_id("42")      # 42
        normalize_record_id(uuid_obj)  # "550e8400-..."
        normalize_record_id("task-1")  # "task-1"
    """
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return value


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base class for errors raised by the lib adapters (record client, local
    store) rather than by the backend itself.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging

    Example:
        raise ApplicationError(
            "Record 7 not found in task6",
            code="RECORD_NOT_FOUND",
            details={"table": "task6", "record_id": 7},
        )
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Error as a dict for logs and API responses; empty parts are left out."""
        result: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result
