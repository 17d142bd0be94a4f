"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the authorization service. The service is
built from infrastructure implementations here; routes depend only on
these dependencies, not on infra directly.

Backend HTTP clients and the set cache are created in app lifespan
(app.state). Switch the group intersection backend via
PERMISSION_INTERSECTION_BACKEND in config.
"""

from __future__ import annotations

from fastapi import Request

from app.application.interfaces.services import IGroupIntersector
from app.application.services.authorization_service import AuthorizationService
from app.core.config import get_settings
from app.domain.enums import LookupFailurePolicy
from app.infrastructure.cache.redis_cache import SetCacheService
from app.infrastructure.external.clients import (
    ContentServiceClient,
    IdentityServiceClient,
)
from app.infrastructure.services.group_intersection import (
    CachedGroupIntersector,
    LocalGroupIntersector,
)


def get_group_intersector(request: Request) -> IGroupIntersector:
    """Local intersection by default; Redis scratch keys when configured.

    With the redis backend and no cache on app.state (e.g. lifespan not
    run), a disconnected SetCacheService is used so checks fail with
    AuthorizationUnavailableException instead of silently going local.
    """
    settings = get_settings()
    if settings.permission_intersection_backend != "redis":
        return LocalGroupIntersector()
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        cache = SetCacheService()
    return CachedGroupIntersector(cache, ttl=settings.permission_scratch_ttl_seconds)


def get_authorization_service(request: Request) -> AuthorizationService:
    """Build AuthorizationService from the shared backend HTTP clients (composition root)."""
    settings = get_settings()
    content = ContentServiceClient(request.app.state.lp_http_client)
    return AuthorizationService(
        identity=IdentityServiceClient(request.app.state.sso_http_client),
        content=content,
        attempts=content,
        intersector=get_group_intersector(request),
        lookup_failure_policy=LookupFailurePolicy(
            settings.permission_lookup_failure_policy
        ),
    )
