"""Application interfaces (ports): service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.services import (
    IAttemptOwnership,
    IContentSharingLookup,
    IEphemeralSetCache,
    IGroupIntersector,
    IIdentityGroupLookup,
)

__all__ = [
    "IAttemptOwnership",
    "IContentSharingLookup",
    "IEphemeralSetCache",
    "IGroupIntersector",
    "IIdentityGroupLookup",
]
