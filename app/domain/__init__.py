"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import AuthorizationDecision, GroupRole, LookupFailurePolicy
from app.domain.exceptions import (
    AuthorizationException,
    AuthorizationUnavailableException,
    GatewayException,
    ValidationException,
)
from app.domain.value_objects import (
    GroupAdminQuery,
    LessonAttemptQuery,
    PermissionQuery,
)

__all__ = [
    # Enums
    "AuthorizationDecision",
    "GroupRole",
    "LookupFailurePolicy",
    # Exceptions
    "AuthorizationException",
    "AuthorizationUnavailableException",
    "GatewayException",
    "ValidationException",
    # Value objects
    "GroupAdminQuery",
    "LessonAttemptQuery",
    "PermissionQuery",
]
