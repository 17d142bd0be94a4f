"""Domain enumerations for the gateway.

Enums represent fixed sets of domain values (decision outcome, group role,
lookup failure policy).
"""

from enum import Enum


class AuthorizationDecision(str, Enum):
    """Outcome of an authorization check.

    Errors are not decisions; they are raised as GatewayException subclasses.
    """

    GRANTED = "granted"
    DENIED = "denied"

    @classmethod
    def from_bool(cls, granted: bool) -> "AuthorizationDecision":
        """Map a boolean check result to a decision."""
        return cls.GRANTED if granted else cls.DENIED


class GroupRole(str, Enum):
    """Role a user holds in a learning group; selects the identity lookup."""

    ADMIN = "admin"
    LEARNER = "learner"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid role values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [role.value for role in cls]


class LookupFailurePolicy(str, Enum):
    """What the engine does when a group lookup fails mid-check."""

    DENY = "deny"
    RAISE = "raise"
