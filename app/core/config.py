"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backend URLs and enum-like fields are validated at
load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.constants import (
    CACHE_RECONNECT_BACKOFF_SECONDS,
    INTERSECTION_BACKENDS,
    LOOKUP_FAILURE_POLICIES,
    PERMISSION_SCRATCH_TTL_SECONDS,
)


class Settings(BaseSettings):
    """Gateway settings loaded from environment and .env.

    All settings have defaults suitable for local development; see
    validate_backends for the cross-field rules.
    """

    # App
    app_name: str = "lp-api-gateway"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_timeout_seconds: int = 5
    request_id_header: str = "X-Request-ID"

    # Backend services (identity/SSO and learning platform)
    sso_base_url: str = "http://localhost:44044"
    lp_base_url: str = "http://localhost:44045"
    upstream_timeout_seconds: float = 5.0

    # Redis (ephemeral set cache)
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_reconnect_backoff_seconds: float = CACHE_RECONNECT_BACKOFF_SECONDS

    # Authorization engine
    # "local": in-process set intersection; "redis": scratch keys in Redis.
    permission_intersection_backend: str = "local"
    permission_scratch_ttl_seconds: int = PERMISSION_SCRATCH_TTL_SECONDS
    # What to do when a group lookup fails mid-check: "deny" or "raise".
    permission_lookup_failure_policy: str = "deny"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_jaeger_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_backends(self) -> "Settings":
        """Validate intersection backend, lookup policy and backend URLs.

        - permission_intersection_backend must be 'local' or 'redis'.
        - 'redis' requires REDIS_ENABLED=true.
        - permission_lookup_failure_policy must be 'deny' or 'raise'.
        """
        if self.permission_intersection_backend not in INTERSECTION_BACKENDS:
            raise ValueError(
                "permission_intersection_backend must be one of "
                f"{INTERSECTION_BACKENDS}, got: {self.permission_intersection_backend!r}"
            )
        if self.permission_intersection_backend == "redis" and not self.redis_enabled:
            raise ValueError(
                "PERMISSION_INTERSECTION_BACKEND=redis requires REDIS_ENABLED=true. "
                "Set in environment or .env file."
            )
        if self.permission_lookup_failure_policy not in LOOKUP_FAILURE_POLICIES:
            raise ValueError(
                "permission_lookup_failure_policy must be one of "
                f"{LOOKUP_FAILURE_POLICIES}, got: {self.permission_lookup_failure_policy!r}"
            )
        if self.permission_scratch_ttl_seconds <= 0:
            raise ValueError("permission_scratch_ttl_seconds must be positive")
        for name in ("sso_base_url", "lp_base_url"):
            value = getattr(self, name)
            if not value.startswith(("http://", "https://")):
                raise ValueError(f"{name} must be an http(s) URL, got: {value!r}")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
