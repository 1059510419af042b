"""
Custom exceptions for the application.

Every error raised by the core carries an ErrorCode. The HTTP boundary turns
the exception kind into a status through ERROR_STATUS and never inspects
individual exception types.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Coarse error category used by the boundary."""

    NOT_FOUND = "NOT_FOUND"
    BUSINESS = "BUSINESS"
    ILLEGAL_ARGUMENT = "ILLEGAL_ARGUMENT"
    UNAUTHORIZED = "UNAUTHORIZED"
    INTERNAL = "INTERNAL"


class ErrorCode(str, Enum):
    """Specific error reasons reported to callers."""

    NOT_FOUND_USER = "NOT_FOUND_USER"
    NOT_FOUND_TASK = "NOT_FOUND_TASK"
    NOT_FOUND_TIME_BLOCK = "NOT_FOUND_TIME_BLOCK"
    TIME_CONFLICT = "TIME_CONFLICT"
    NOT_SAME_DATE_CONFLICT = "NOT_SAME_DATE_CONFLICT"
    TIME_INVALID = "TIME_INVALID"
    INVALID_ARGUMENTS = "INVALID_ARGUMENTS"
    INVALID_DATE_FORMAT = "INVALID_DATE_FORMAT"
    UNAUTHORIZED = "UNAUTHORIZED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"

    @property
    def message(self) -> str:
        return ERROR_MESSAGES[self]


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.NOT_FOUND_USER: "User not found",
    ErrorCode.NOT_FOUND_TASK: "Task not found",
    ErrorCode.NOT_FOUND_TIME_BLOCK: "Time block not found",
    ErrorCode.TIME_CONFLICT: "Time block conflicts with an existing time block",
    ErrorCode.NOT_SAME_DATE_CONFLICT: "Start and end time must be on the same date",
    ErrorCode.TIME_INVALID: "Time must be aligned to 15-minute slots",
    ErrorCode.INVALID_ARGUMENTS: "Invalid arguments",
    ErrorCode.INVALID_DATE_FORMAT: "Invalid date format",
    ErrorCode.UNAUTHORIZED: "Authentication required",
    ErrorCode.INTERNAL_SERVER_ERROR: "Internal server error",
}

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.BUSINESS: 409,
    ErrorKind.ILLEGAL_ARGUMENT: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.INTERNAL: 500,
}


class NutshellError(Exception):
    """Base exception for nutshell."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        code: ErrorCode,
        message: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        self.code = code
        self.message = message or code.message
        self.details = details
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return ERROR_STATUS[self.kind]

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "kind": self.kind.value,
            "status": self.status_code,
            "code": self.code.value,
            "message": self.message,
        }
        if self.details is not None:
            payload["details"] = self.details
        return payload


class NotFoundError(NutshellError):
    """Resource not found or not owned by the caller."""

    kind = ErrorKind.NOT_FOUND


class BusinessLogicError(NutshellError):
    """Business logic constraint violation."""

    kind = ErrorKind.BUSINESS


class IllegalArgumentError(NutshellError):
    """Malformed or unsupported request parameter."""

    kind = ErrorKind.ILLEGAL_ARGUMENT


class AuthenticationError(NutshellError):
    """Authentication failed."""

    kind = ErrorKind.UNAUTHORIZED


class InfrastructureError(NutshellError):
    """Infrastructure-related error (DB, external services, etc.)."""

    kind = ErrorKind.INTERNAL
