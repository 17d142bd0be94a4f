"""Domain exceptions for the gateway.

Defines domain-level exceptions that represent invalid input, business
denials and unavailable authorization decisions. These exceptions are
independent of infrastructure concerns. Presentation layer maps them to
HTTP responses in exception handlers.
"""

from typing import Any


class GatewayException(Exception):
    """Base exception for all gateway errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, channel_id).
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

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(GatewayException):
    """Raised when input validation fails (e.g. missing user_id, zero channel_id)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthorizationException(GatewayException):
    """Raised when the user lacks access to the requested resource."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'channel', 'lesson_attempt').
            action: Optional action that was attempted (e.g. 'manage', 'access').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class AuthorizationUnavailableException(GatewayException):
    """Raised when a decision cannot be made because a backend or the cache failed.

    The original infrastructure error is chained as __cause__.
    """

    def __init__(self, operation: str, reason: str) -> None:
        """Initialize with the failing step and a short reason.

        Args:
            operation: Step that failed (e.g. 'is_channel_creator').
            reason: Human-readable reason (e.g. upstream status).
        """
        super().__init__(
            f"Authorization check failed at {operation}",
            "AUTHORIZATION_UNAVAILABLE",
            {"operation": operation, "reason": reason},
        )
