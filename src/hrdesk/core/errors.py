"""
Error model for HR Desk operations.

Every failure surfaced by the core carries a structured error code so
callers can map it onto a response without inspecting messages.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Structured error codes for core operations."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    STORE_ERROR = "STORE_ERROR"


class HRDeskError(Exception):
    """Base exception for core errors with structured error information."""

    code: ErrorCode = ErrorCode.STORE_ERROR

    def __init__(
        self,
        message: str,
        retryable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[list[dict[str, Any]]] = None,
    ):
        """
        Initialize a core error.

        Args:
            message: Human-readable error message
            retryable: Whether the operation can be retried by the caller
            original_error: The original exception if this wraps another error
            details: Per-field validation problems, if any
        """
        self.message = message
        self.retryable = retryable
        self.original_error = original_error
        self.details = details or []
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert error to a response-ready dictionary."""
        error: dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
            "retryable": self.retryable,
        }
        if self.details:
            error["details"] = self.details
        return {"error": error}


class ValidationError(HRDeskError):
    """Malformed input to an operation. No mutation has occurred."""

    code = ErrorCode.VALIDATION_ERROR


class ForbiddenError(HRDeskError):
    """Caller role does not match the role the operation requires."""

    code = ErrorCode.FORBIDDEN


class NotFoundError(HRDeskError):
    """Mutation target does not resolve to an existing record."""

    code = ErrorCode.NOT_FOUND


class StoreError(HRDeskError):
    """Unexpected failure from the persistence layer."""

    code = ErrorCode.STORE_ERROR

    def __init__(self, original_error: Optional[Exception] = None):
        super().__init__(
            "Internal storage error",
            retryable=False,
            original_error=original_error,
        )


def validation_error_from_pydantic(error: Any, message: str) -> ValidationError:
    """
    Build a ValidationError from a pydantic ValidationError.

    Only field locations and messages are kept; input values are dropped.
    """
    details = [
        {"field": ".".join(str(part) for part in item["loc"]), "message": item["msg"]}
        for item in error.errors()
    ]
    return ValidationError(message, details=details)
