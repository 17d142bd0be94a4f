"""Core constants: scratch cache key prefixes and shared literal values.

Single source of truth for cache key structure (DRY). Used by
app.infrastructure.cache.keys and the cached group intersector.
"""

# Scratch key prefixes for group-set intersection (used with :id:check_id)
CACHE_PREFIX_USER_GROUPS = "user_groups"
CACHE_PREFIX_CHANNEL_SHARED_GROUPS = "channel_shared_groups"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Scratch keys are deleted by the check that wrote them; TTL is a crash backstop.
PERMISSION_SCRATCH_TTL_SECONDS = 60

# Sentinel plan_id meaning "no plan-level gate"
NO_PLAN_ID = 0

# Intersection backends and lookup-failure policies accepted by Settings
INTERSECTION_BACKENDS = ("local", "redis")
LOOKUP_FAILURE_POLICIES = ("deny", "raise")

# Minimum gap between attempts to reach Redis while it is down
CACHE_RECONNECT_BACKOFF_SECONDS = 1.0
