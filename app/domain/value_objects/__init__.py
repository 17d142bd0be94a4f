"""Domain value objects and shared value types."""

from app.domain.value_objects.core import (
    GroupAdminQuery,
    LessonAttemptQuery,
    PermissionQuery,
)

__all__ = [
    "GroupAdminQuery",
    "LessonAttemptQuery",
    "PermissionQuery",
]
