"""Scratch cache key builders. Single place for key format (DRY).

Key components (user_id, check_id) must not contain CACHE_KEY_SEP to
avoid ambiguous or colliding keys. check_id namespaces the keys per
check so concurrent checks for the same (user, channel) pair never share
scratch space.
"""

import secrets

from app.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_CHANNEL_SHARED_GROUPS,
    CACHE_PREFIX_USER_GROUPS,
)


def validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def new_check_id() -> str:
    """Return a fresh random token that scopes one check's scratch keys."""
    return secrets.token_hex(8)


def user_groups_key(user_id: str, check_id: str) -> str:
    """Scratch key for the user's role-appropriate group set."""
    validate_key_component(user_id, "user_id")
    validate_key_component(check_id, "check_id")
    return f"{CACHE_PREFIX_USER_GROUPS}{CACHE_KEY_SEP}{user_id}{CACHE_KEY_SEP}{check_id}"


def channel_shared_groups_key(channel_id: int, check_id: str) -> str:
    """Scratch key for the groups a channel is shared with."""
    validate_key_component(check_id, "check_id")
    return (
        f"{CACHE_PREFIX_CHANNEL_SHARED_GROUPS}{CACHE_KEY_SEP}{channel_id}"
        f"{CACHE_KEY_SEP}{check_id}"
    )
