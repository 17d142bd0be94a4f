"""Tests for domain and infrastructure exceptions (error_code, message, details)."""

from app.domain.exceptions import (
    AuthorizationException,
    AuthorizationUnavailableException,
    GatewayException,
    ValidationException,
)
from app.infrastructure.exceptions import CacheUnavailableError, UpstreamServiceError


def test_gateway_exception_default_error_code() -> None:
    """Base GatewayException uses class name as error_code when not provided."""
    exc = GatewayException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "GatewayException"
    assert exc.details == {}


def test_gateway_exception_to_dict() -> None:
    exc = GatewayException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception() -> None:
    exc = ValidationException("channel_id must be a non-zero integer", field="channel_id")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "channel_id"}


def test_authorization_exception_with_resource_and_action() -> None:
    exc = AuthorizationException(resource="plan", action="manage")
    assert exc.message == "Permission denied: manage on plan"
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.details == {"resource": "plan", "action": "manage"}


def test_authorization_exception_default_message() -> None:
    exc = AuthorizationException()
    assert exc.message == "Permission denied"
    assert exc.details == {}


def test_authorization_unavailable_exception() -> None:
    exc = AuthorizationUnavailableException("is_channel_creator", "timeout")
    assert exc.error_code == "AUTHORIZATION_UNAVAILABLE"
    assert exc.details == {"operation": "is_channel_creator", "reason": "timeout"}


def test_upstream_service_error_includes_status_code() -> None:
    exc = UpstreamServiceError("sso", "is_group_admin", "unexpected status 502", 502)
    assert exc.error_code == "UPSTREAM_ERROR"
    assert exc.details["status_code"] == 502
    assert isinstance(exc, GatewayException)


def test_cache_unavailable_default_reason() -> None:
    exc = CacheUnavailableError("save_set")
    assert exc.error_code == "CACHE_UNAVAILABLE"
    assert exc.details == {"operation": "save_set", "reason": "Redis unavailable"}
