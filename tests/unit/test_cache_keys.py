"""Scratch cache key builders."""

import pytest

from app.infrastructure.cache.keys import (
    channel_shared_groups_key,
    new_check_id,
    user_groups_key,
)


def test_user_groups_key_format() -> None:
    assert user_groups_key("u1", "abc") == "user_groups:u1:abc"


def test_channel_shared_groups_key_format() -> None:
    assert channel_shared_groups_key(42, "abc") == "channel_shared_groups:42:abc"


def test_check_ids_are_unique() -> None:
    ids = {new_check_id() for _ in range(100)}
    assert len(ids) == 100
    assert all(len(check_id) == 16 for check_id in ids)


@pytest.mark.parametrize("user_id", ["", "a:b"])
def test_user_groups_key_rejects_bad_user_id(user_id: str) -> None:
    with pytest.raises(ValueError):
        user_groups_key(user_id, "abc")


def test_keys_reject_check_id_with_separator() -> None:
    with pytest.raises(ValueError):
        channel_shared_groups_key(1, "x:y")
