"""Cache: Redis set service and scratch key utilities.

Used by the cached group intersector as ephemeral scratch space.
SetCacheService uses app.core.config; key format is in keys.py (DRY).
"""

from app.infrastructure.cache.keys import (
    channel_shared_groups_key,
    new_check_id,
    user_groups_key,
)
from app.infrastructure.cache.redis_cache import SetCacheService

__all__ = [
    "SetCacheService",
    "channel_shared_groups_key",
    "new_check_id",
    "user_groups_key",
]
