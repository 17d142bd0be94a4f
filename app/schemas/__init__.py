"""Pydantic request/response schemas for the API."""

from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from app.schemas.permission import (
    ChannelPermissionRequest,
    GroupAdminPermissionRequest,
    LessonAttemptPermissionRequest,
    PermissionCheckResponse,
)

__all__ = [
    "ChannelPermissionRequest",
    "GroupAdminPermissionRequest",
    "HealthResponse",
    "LessonAttemptPermissionRequest",
    "PermissionCheckResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
]
