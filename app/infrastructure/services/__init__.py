"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.group_intersection import (
    CachedGroupIntersector,
    LocalGroupIntersector,
)

__all__ = [
    "CachedGroupIntersector",
    "LocalGroupIntersector",
]
