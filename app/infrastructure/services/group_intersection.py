"""Group-set intersection strategies (implement IGroupIntersector).

LocalGroupIntersector intersects in process memory and is the default.
CachedGroupIntersector computes the intersection server-side through the
ephemeral set cache, writing both sets under keys unique to the current
check and deleting them before returning.
"""

from __future__ import annotations

import logging

from app.application.interfaces.services import IEphemeralSetCache
from app.core.constants import PERMISSION_SCRATCH_TTL_SECONDS
from app.domain.exceptions import ValidationException
from app.infrastructure.cache.keys import (
    channel_shared_groups_key,
    new_check_id,
    user_groups_key,
    validate_key_component,
)
from app.infrastructure.exceptions import CacheUnavailableError

logger = logging.getLogger(__name__)


class LocalGroupIntersector:
    """Per-call hash-set intersection; no shared state, nothing to clean up."""

    def validate_user_id(self, user_id: str) -> None:
        """Any non-blank user_id works in memory."""

    async def intersect(
        self,
        user_id: str,
        channel_id: int,
        user_groups: frozenset[str],
        shared_groups: frozenset[str],
    ) -> frozenset[str]:
        return user_groups & shared_groups


class CachedGroupIntersector:
    """Write -> SINTER -> delete through the set cache, one key pair per check."""

    def __init__(
        self,
        cache: IEphemeralSetCache,
        ttl: int = PERMISSION_SCRATCH_TTL_SECONDS,
    ) -> None:
        self.cache = cache
        self.ttl = ttl

    def validate_user_id(self, user_id: str) -> None:
        """Reject user ids that cannot be embedded in a scratch key.

        Raises:
            ValidationException: If user_id contains the key separator.
        """
        try:
            validate_key_component(user_id, "user_id")
        except ValueError as e:
            raise ValidationException(str(e), field="user_id") from e

    async def intersect(
        self,
        user_id: str,
        channel_id: int,
        user_groups: frozenset[str],
        shared_groups: frozenset[str],
    ) -> frozenset[str]:
        """Return the overlap computed in the cache.

        Either set being empty means the overlap is empty, so nothing is
        written. Writes are best-effort: a failed write leaves its key
        missing, which intersects as empty (a denial). Both scratch keys
        are deleted whether the intersection succeeds, fails, or the task
        is cancelled.

        Raises:
            ValidationException: If user_id cannot be used in a cache key.
            CacheUnavailableError: If the cache cannot compute the intersection.
        """
        if not user_groups or not shared_groups:
            return frozenset()

        self.validate_user_id(user_id)
        check_id = new_check_id()
        user_key = user_groups_key(user_id, check_id)
        channel_key = channel_shared_groups_key(channel_id, check_id)

        try:
            await self._save(user_key, user_groups)
            await self._save(channel_key, shared_groups)
            overlap = await self.cache.intersect(user_key, channel_key)
        finally:
            await self.cache.delete_keys(user_key, channel_key)
        logger.debug(
            "Scratch intersection for user %s channel %s: %s groups",
            user_id,
            channel_id,
            len(overlap),
        )
        return frozenset(overlap)

    async def _save(self, key: str, members: frozenset[str]) -> None:
        try:
            await self.cache.save_set(key, members, ttl=self.ttl)
        except CacheUnavailableError as e:
            logger.warning(
                "Cache write failed for %s: %s (intersects as empty)",
                key,
                e.details.get("reason"),
            )
