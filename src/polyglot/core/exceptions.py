"""Centralized exception hierarchy for the application.

All custom exceptions inherit from AppException, which provides:
- Consistent error response format
- HTTP status codes
- Machine-readable error codes
- Optional details dict for additional context

Exception handlers in main.py convert these to JSON responses.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    Provides a consistent structure for error responses with:
    - message: Human-readable error description
    - error_code: Machine-readable code (e.g., "AUTH_FAILED")
    - status_code: HTTP status code
    - details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dict for JSON serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class AuthenticationError(AppException):
    """Bearer token missing, malformed, expired or of the wrong type."""

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message, "AUTH_FAILED", 401)


class ResourceNotFoundError(AppException):
    """Requested resource does not exist."""

    def __init__(self, resource: str, identifier: str | int | None = None):
        msg = f"{resource} not found"
        details: dict[str, Any] = {"resource": resource}
        if identifier is not None:
            msg = f"{resource} not found: {identifier}"
            details["id"] = identifier
        super().__init__(
            msg,
            f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
            404,
            details,
        )


class ValidationError(AppException):
    """Request validation failed.

    ``errors`` maps a field path (``"code"``, ``"tags.1"``) to the list of
    messages for that field.
    """

    def __init__(
        self,
        errors: dict[str, list[str]],
        message: str = "The given data was invalid.",
    ):
        self.errors = errors
        super().__init__(message, "VALIDATION_ERROR", 422, {"errors": errors})


class ConflictError(AppException):
    """A write lost a race against a uniqueness or foreign key constraint."""

    def __init__(self, message: str = "The resource was modified concurrently"):
        super().__init__(message, "CONFLICT", 409)


class StorageError(AppException):
    """The database failed while executing a unit of work."""

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message, "STORAGE_ERROR", 500)
