"""Settings validation."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_defaults_use_local_intersection_and_deny_policy() -> None:
    settings = Settings()
    assert settings.permission_intersection_backend == "local"
    assert settings.permission_lookup_failure_policy == "deny"
    assert settings.permission_scratch_ttl_seconds == 60


def test_redis_backend_requires_redis_enabled() -> None:
    with pytest.raises(ValidationError):
        Settings(permission_intersection_backend="redis", redis_enabled=False)


def test_redis_backend_with_redis_enabled() -> None:
    settings = Settings(permission_intersection_backend="redis", redis_enabled=True)
    assert settings.permission_intersection_backend == "redis"


@pytest.mark.parametrize(
    "overrides",
    [
        {"permission_intersection_backend": "memcached"},
        {"permission_lookup_failure_policy": "allow"},
        {"permission_scratch_ttl_seconds": 0},
        {"sso_base_url": "localhost:44044"},
    ],
)
def test_invalid_settings_are_rejected(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(**overrides)
