"""Service interfaces (ports) for the application layer.

Protocols define the narrow capabilities the authorization engine needs
from each collaborator (DIP). Infrastructure adapters implement them;
tests drive the engine through fakes.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol


# Identity (SSO) service interface
class IIdentityGroupLookup(Protocol):
    """Protocol for resolving a user's learning-group memberships."""

    async def groups_where_user_is_admin(self, user_id: str) -> list[str]:
        """Return ids of the groups the user administers."""

    async def groups_where_user_is_learner(self, user_id: str) -> list[str]:
        """Return ids of the groups the user learns in."""

    async def is_group_admin(self, user_id: str, group_id: str) -> bool:
        """Return True if the user administers the group."""


# Learning platform sharing interface
class IContentSharingLookup(Protocol):
    """Protocol for channel ownership and sharing facts."""

    async def is_channel_creator(self, user_id: str, channel_id: int) -> bool:
        """Return True if the user created the channel."""

    async def groups_channel_is_shared_with(self, channel_id: int) -> list[str]:
        """Return ids of the groups the channel is shared with."""

    async def is_user_shared_with_plan(self, user_id: str, plan_id: int) -> bool:
        """Return True if the plan is explicitly shared with the user."""


# Lesson attempt ownership interface
class IAttemptOwnership(Protocol):
    """Protocol for lesson-attempt ownership."""

    async def is_lesson_attempt_owner(self, user_id: str, lesson_attempt_id: int) -> bool:
        """Return True if the attempt belongs to the user."""


# Ephemeral set cache interface
class IEphemeralSetCache(Protocol):
    """Minimal set-cache protocol used as scratch space for intersections."""

    def is_available(self) -> bool:
        """Return True if cache is connected."""

    async def save_set(self, key: str, members: Iterable[str], ttl: int = 60) -> None:
        """Union-add members into the set at key; refresh TTL."""

    async def intersect(self, key_a: str, key_b: str) -> set[str]:
        """Return members present in both sets."""

    async def delete_keys(self, *keys: str) -> int:
        """Delete keys (best-effort). Returns count deleted."""


# Group intersection strategy interface
class IGroupIntersector(Protocol):
    """Protocol for computing the overlap of a user's groups and a channel's shared groups."""

    def validate_user_id(self, user_id: str) -> None:
        """Raise ValidationException if user_id cannot be used by this strategy."""

    async def intersect(
        self,
        user_id: str,
        channel_id: int,
        user_groups: frozenset[str],
        shared_groups: frozenset[str],
    ) -> frozenset[str]:
        """Return the groups present in both sets."""
