"""Application layer: interfaces, DTOs, services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (backend clients, set cache).
"""

from app.application.interfaces import (
    IAttemptOwnership,
    IContentSharingLookup,
    IEphemeralSetCache,
    IGroupIntersector,
    IIdentityGroupLookup,
)
from app.application.services.authorization_service import AuthorizationService

__all__ = [
    "AuthorizationService",
    "IAttemptOwnership",
    "IContentSharingLookup",
    "IEphemeralSetCache",
    "IGroupIntersector",
    "IIdentityGroupLookup",
]
