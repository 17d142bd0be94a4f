"""Smoke tests for health, readiness and app wiring."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient

from app.main import app


@pytest.fixture
def redis_backend(monkeypatch: pytest.MonkeyPatch):
    """Configure the redis intersection backend; restores app.state.cache afterwards."""
    monkeypatch.setenv("REDIS_ENABLED", "true")
    monkeypatch.setenv("PERMISSION_INTERSECTION_BACKEND", "redis")
    previous = getattr(app.state, "cache", None)
    yield
    app.state.cache = previous


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_health_sets_request_id_header(client: AsyncClient) -> None:
    """A generated X-Request-ID is returned on every response."""
    response = await client.get("/api/v1/health")
    assert response.headers.get("X-Request-ID")


async def test_health_forwards_valid_request_id(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


async def test_health_replaces_unsafe_request_id(client: AsyncClient) -> None:
    """Request IDs with characters outside [A-Za-z0-9_-] are replaced."""
    response = await client.get(
        "/api/v1/health", headers={"X-Request-ID": "bad id;<script>"}
    )
    assert response.headers["X-Request-ID"] != "bad id;<script>"


async def test_readiness_local_backend_ignores_redis(client: AsyncClient) -> None:
    """With the local backend, readiness does not depend on Redis."""
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "intersection_backend": "local"}


async def test_readiness_redis_backend_without_cache_is_503(
    client: AsyncClient, redis_backend: None
) -> None:
    app.state.cache = None
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"


async def test_readiness_redis_backend_with_cache_is_ok(
    client: AsyncClient, redis_backend: None
) -> None:
    cache = MagicMock()
    cache.ensure_connected = AsyncMock(return_value=True)
    app.state.cache = cache
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["intersection_backend"] == "redis"


async def test_unknown_route_returns_json_404(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nope")
    assert response.status_code == 404
    assert response.json()["error"] == "HTTP_ERROR"


async def test_readiness_recovers_when_redis_comes_back(
    client: AsyncClient, redis_backend: None
) -> None:
    """Readiness reconnects instead of reporting a stale outage."""
    cache = MagicMock()
    cache.ensure_connected = AsyncMock(side_effect=[False, True])
    app.state.cache = cache

    assert (await client.get("/api/v1/health/ready")).status_code == 503
    assert (await client.get("/api/v1/health/ready")).status_code == 200
