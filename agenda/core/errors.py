"""Error classification utilities for service and persistence failures."""

from enum import Enum

from pydantic import BaseModel

from agenda.core.config import Constants


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Record errors
    ERR_TASK_NOT_FOUND = "ERR_TASK_NOT_FOUND"
    ERR_USER_NOT_FOUND = "ERR_USER_NOT_FOUND"
    ERR_EVENT_NOT_FOUND = "ERR_EVENT_NOT_FOUND"
    ERR_NOVELTY_NOT_FOUND = "ERR_NOVELTY_NOT_FOUND"
    ERR_RECORD_NOT_FOUND = "ERR_RECORD_NOT_FOUND"

    # Scheduling errors
    ERR_INVALID_SCHEDULE = "ERR_INVALID_SCHEDULE"
    ERR_INVALID_STATUS_TRANSITION = "ERR_INVALID_STATUS_TRANSITION"

    # Permission errors
    ERR_PERMISSION_DENIED = "ERR_PERMISSION_DENIED"

    # Persistence errors
    ERR_PERSISTENCE_FAILURE = "ERR_PERSISTENCE_FAILURE"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


_NOT_FOUND_CODES: dict[str, str] = {
    "tasks": ErrorCode.ERR_TASK_NOT_FOUND,
    "users": ErrorCode.ERR_USER_NOT_FOUND,
    "calendar_events": ErrorCode.ERR_EVENT_NOT_FOUND,
    "novelties": ErrorCode.ERR_NOVELTY_NOT_FOUND,
}


def _not_found_code(error_str: str) -> str:
    for collection, code in _NOT_FOUND_CODES.items():
        if collection in error_str:
            return code
    return ErrorCode.ERR_RECORD_NOT_FOUND


def classify_error_with_response(exception: Exception) -> ErrorResponse:  # noqa: PLR0911
    """Classify an error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised during execution

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    error_str = str(exception).lower()
    exception_type = type(exception).__name__

    if exception_type in {"RecordNotFoundError", "KeyError"} or "not found" in error_str:
        return ErrorResponse(
            code=_not_found_code(error_str),
            message="The requested record does not exist.",
            suggestion="Refresh the agenda and try again.",
            severity=ErrorSeverity.LOW,
        )

    if exception_type == "PermissionError" or "not authorized" in error_str or "permission denied" in error_str:
        return ErrorResponse(
            code=ErrorCode.ERR_PERMISSION_DENIED,
            message="You don't have permission for this action.",
            suggestion="Ask an owner or admin to make this change.",
            severity=ErrorSeverity.MEDIUM,
        )

    if exception_type == "ValueError" and ("status" in error_str or "cannot" in error_str):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_STATUS_TRANSITION,
            message="This action cannot be performed in the current state.",
            suggestion="Check the task status and try again.",
            severity=ErrorSeverity.LOW,
        )

    if exception_type == "ValueError" or "schedule" in error_str or "end date" in error_str:
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_SCHEDULE,
            message="Invalid scheduling data.",
            suggestion="A task needs a start date or at least one weekday, and must not end before it starts.",
            severity=ErrorSeverity.LOW,
        )

    if exception_type in {"DatabaseError", "RuntimeError"} or "failed to" in error_str:
        return ErrorResponse(
            code=ErrorCode.ERR_PERSISTENCE_FAILURE,
            message="The change could not be saved.",
            suggestion="Please try again. If the problem persists, contact an administrator.",
            severity=ErrorSeverity.HIGH,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, contact an administrator.",
        severity=ErrorSeverity.MEDIUM,
    )


_STATUS_BY_CODE: dict[str, int] = {
    ErrorCode.ERR_TASK_NOT_FOUND: Constants.HTTP_NOT_FOUND,
    ErrorCode.ERR_USER_NOT_FOUND: Constants.HTTP_NOT_FOUND,
    ErrorCode.ERR_EVENT_NOT_FOUND: Constants.HTTP_NOT_FOUND,
    ErrorCode.ERR_NOVELTY_NOT_FOUND: Constants.HTTP_NOT_FOUND,
    ErrorCode.ERR_RECORD_NOT_FOUND: Constants.HTTP_NOT_FOUND,
    ErrorCode.ERR_PERMISSION_DENIED: Constants.HTTP_FORBIDDEN,
    ErrorCode.ERR_INVALID_SCHEDULE: Constants.HTTP_BAD_REQUEST,
    ErrorCode.ERR_INVALID_STATUS_TRANSITION: Constants.HTTP_BAD_REQUEST,
}


def http_status_for(response: ErrorResponse) -> int:
    """Map an error response to the HTTP status code returned to clients."""
    return _STATUS_BY_CODE.get(response.code, Constants.HTTP_SERVER_ERROR)
