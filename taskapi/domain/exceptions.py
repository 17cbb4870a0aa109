"""Domain exceptions for the task API.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers
(taskapi.core.exception_handlers).
"""

from typing import Any


class TaskApiException(Exception):
    """Base exception for all task API errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using error_code; only error_code and message
    are ever sent to the client.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context for logs (e.g. resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        """Return the two-field error body shared by every error response."""
        return {"error": self.error_code, "message": self.message}


class InvalidRequestException(TaskApiException):
    """Raised for malformed input that never reaches validation (bad JSON, bad id)."""

    def __init__(
        self, message: str = "Invalid JSON", error_code: str = "invalid_request"
    ) -> None:
        super().__init__(message, error_code)


class ValidationException(TaskApiException):
    """Raised when one or more field constraints are violated.

    Per-field messages are joined with ", " into the message.
    """

    def __init__(self, errors: list[str] | str, field: str | None = None) -> None:
        """Initialize with one message or a list of per-field messages.

        Args:
            errors: Single message or list of messages (one per violated constraint).
            field: Optional field name when a single field failed.
        """
        self.errors = [errors] if isinstance(errors, str) else list(errors)
        details: dict[str, Any] = {"errors": self.errors}
        if field:
            details["field"] = field
        super().__init__(", ".join(self.errors), "validation_error", details)


class NoValidUpdatesException(TaskApiException):
    """Raised when an update field-map has nothing left after dropping disallowed keys."""

    def __init__(self) -> None:
        super().__init__("No valid fields to update", "no_updates")


class AuthenticationException(TaskApiException):
    """Raised when authentication fails (missing header, bad credentials)."""

    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: str = "unauthorized",
    ) -> None:
        """Initialize with optional message and code.

        Args:
            message: Description of the authentication failure.
            error_code: e.g. missing_authorization, invalid_credentials.
        """
        super().__init__(message, error_code)


class InvalidTokenException(AuthenticationException):
    """Raised when a bearer token is malformed, badly signed, or expired."""

    def __init__(self, reason: str | None = None) -> None:
        """Initialize; reason is kept for logs and never sent to the client."""
        super().__init__("Invalid or expired token", "invalid_token")
        if reason:
            self.details["reason"] = reason


class ForbiddenException(TaskApiException):
    """Raised when the caller may not mutate the target resource."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'task').
            action: Optional action that was attempted (e.g. 'update', 'delete').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Cannot {action} {resource} owned by another user"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "forbidden", details)


class NotFoundException(TaskApiException):
    """Raised when a resource is absent or soft-deleted (the two are indistinguishable)."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'task').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type.capitalize()} not found",
            "not_found",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


# Operations whose client-facing message is not "Failed to <op> task".
_STORE_MESSAGES: dict[str, str] = {
    "list": "Failed to list tasks",
    "ping": "Database connection failed",
}


class StoreException(TaskApiException):
    """Raised when the document store fails or times out.

    The client only ever sees the generic message; the cause is logged.
    """

    def __init__(self, operation: str, message: str | None = None) -> None:
        """Initialize with the failed operation name.

        Args:
            operation: Store operation (e.g. 'create', 'list').
            message: Optional client-facing message; defaults to a generic one.
        """
        super().__init__(
            message or _STORE_MESSAGES.get(operation, f"Failed to {operation} task"),
            "database_error",
            {"operation": operation},
        )
