"""Infrastructure exceptions for backend services and the scratch cache.

These extend GatewayException so presentation can map them to HTTP
responses consistently. The authorization engine wraps them into
AuthorizationUnavailableException at its hard-propagated steps.
"""

from app.domain.exceptions import GatewayException


class UpstreamServiceError(GatewayException):
    """A backend service (SSO or learning platform) call failed."""

    def __init__(
        self,
        service: str,
        operation: str,
        reason: str,
        status_code: int | None = None,
    ) -> None:
        details: dict = {"service": service, "operation": operation, "reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            f"{service} call failed: {operation}",
            "UPSTREAM_ERROR",
            details,
        )


class CacheUnavailableError(GatewayException):
    """Scratch cache is disconnected or a set command failed."""

    def __init__(self, operation: str, reason: str = "Redis unavailable") -> None:
        super().__init__(
            f"Cache operation failed: {operation}",
            "CACHE_UNAVAILABLE",
            {"operation": operation, "reason": reason},
        )
