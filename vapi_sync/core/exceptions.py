"""
Custom exceptions for the Vapi sync service.

Every error a handler can raise derives from SyncError and carries:
- a kind (validation, not_found, remote_failure, generic) that handlers and
  logging branch on instead of inspecting error shapes
- the HTTP status code the error maps to
- a JSON body via to_dict(), always with an "error" field

Design pattern: Base exception → Specific exceptions
- ValidationError: missing or unusable request input (400)
- NotFoundError: unknown local record (404)
- RemoteProviderError: Vapi call failed (provider status passed through)
- GenericFailure: anything unexpected (500)
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Machine-readable error categories."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    REMOTE_FAILURE = "remote_failure"
    GENERIC = "generic"


class SyncError(Exception):
    """
    Base exception for all errors surfaced to API clients.

    Attributes:
        message: Human-readable error description, returned as "error"
        kind: Error category
        status_code: HTTP status code for the response
        details: Optional extra context, returned as "details" when set
    """

    kind: ErrorKind = ErrorKind.GENERIC
    default_status_code: int = 500

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: Any = None
    ):
        self.message = message
        self.status_code = status_code or self.default_status_code
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API responses.

        Returns:
            dict: {"error": message} plus "details" when present
        """
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body

    def __str__(self) -> str:
        """String representation for logging."""
        return f"{self.kind.value}: {self.message}"


class ValidationError(SyncError):
    """
    Raised when a request is missing required input or references a record
    that cannot be used (e.g. an assistant that was never synced to Vapi).

    HTTP Status: 400 Bad Request
    """

    kind = ErrorKind.VALIDATION
    default_status_code = 400


class NotFoundError(SyncError):
    """
    Raised when a local record id is unknown.

    HTTP Status: 404 Not Found
    """

    kind = ErrorKind.NOT_FOUND
    default_status_code = 404


class RemoteProviderError(SyncError):
    """
    Raised when a Vapi API call fails.

    The status code and message reported by Vapi are passed through
    unchanged. Transport failures (timeouts, DNS, refused connections) and a
    missing API key have no provider status and map to 500.
    """

    kind = ErrorKind.REMOTE_FAILURE
    default_status_code = 500


class GenericFailure(SyncError):
    """
    Wraps an unexpected exception for the catch-all handler.

    HTTP Status: 500 Internal Server Error
    """

    kind = ErrorKind.GENERIC
    default_status_code = 500
