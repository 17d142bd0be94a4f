"""Pytest configuration and fixtures for the gateway.

Uses app.main:app for HTTP tests. ASGITransport does not run the lifespan,
so API tests swap the authorization service through dependency_overrides
instead of talking to real backends. Backend ports are AsyncMocks; the
scratch set cache is an in-memory fake that records every key it sees.
"""

from collections.abc import Iterable
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.application.services.authorization_service import AuthorizationService
from app.core.config import get_settings
from app.domain.enums import LookupFailurePolicy
from app.infrastructure.exceptions import CacheUnavailableError
from app.infrastructure.services.group_intersection import LocalGroupIntersector
from app.main import app


class InMemorySetCache:
    """IEphemeralSetCache fake: dict of sets, plus a log of written keys."""

    def __init__(self) -> None:
        self.sets: dict[str, set[str]] = {}
        self.ttls: dict[str, int] = {}
        self.written_keys: list[str] = []
        self.fail_on: set[str] = set()

    def is_available(self) -> bool:
        return True

    async def save_set(self, key: str, members: Iterable[str], ttl: int = 60) -> None:
        if "save_set" in self.fail_on:
            raise CacheUnavailableError("save_set")
        values = set(members)
        if not values:
            return
        self.sets.setdefault(key, set()).update(values)
        self.ttls[key] = ttl
        self.written_keys.append(key)

    async def intersect(self, key_a: str, key_b: str) -> set[str]:
        if "intersect" in self.fail_on:
            raise CacheUnavailableError("intersect")
        return self.sets.get(key_a, set()) & self.sets.get(key_b, set())

    async def delete_keys(self, *keys: str) -> int:
        deleted = 0
        for key in keys:
            if self.sets.pop(key, None) is not None:
                deleted += 1
            self.ttls.pop(key, None)
        return deleted


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop cached settings around each test so env overrides take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def identity() -> AsyncMock:
    """Identity port: user groups by role and group admin flag. Defaults to no groups."""
    mock = AsyncMock()
    mock.groups_where_user_is_admin.return_value = []
    mock.groups_where_user_is_learner.return_value = []
    mock.is_group_admin.return_value = False
    return mock


@pytest.fixture
def content() -> AsyncMock:
    """Content port: creator flag, channel shares, plan shares, attempt owner."""
    mock = AsyncMock()
    mock.is_channel_creator.return_value = False
    mock.groups_channel_is_shared_with.return_value = []
    mock.is_user_shared_with_plan.return_value = False
    mock.is_lesson_attempt_owner.return_value = False
    return mock


@pytest.fixture
def set_cache() -> InMemorySetCache:
    return InMemorySetCache()


@pytest.fixture
def authz(identity: AsyncMock, content: AsyncMock) -> AuthorizationService:
    """AuthorizationService with mocked ports and local intersection (deny policy)."""
    return AuthorizationService(
        identity=identity,
        content=content,
        attempts=content,
        intersector=LocalGroupIntersector(),
        lookup_failure_policy=LookupFailurePolicy.DENY,
    )
