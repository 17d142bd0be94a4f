"""Tests for query value objects, lookup results and enums."""

import pytest

from app.application.dtos.permission import GroupLookupResult
from app.domain.enums import AuthorizationDecision, GroupRole
from app.domain.exceptions import ValidationException
from app.domain.value_objects.core import (
    GroupAdminQuery,
    LessonAttemptQuery,
    PermissionQuery,
)


def test_permission_query_defaults_to_no_plan() -> None:
    query = PermissionQuery(user_id="u1", channel_id=5)
    assert query.plan_id == 0
    assert query.has_plan is False


def test_permission_query_with_plan() -> None:
    assert PermissionQuery(user_id="u1", channel_id=5, plan_id=3).has_plan is True


def test_negative_channel_id_is_allowed() -> None:
    """Only zero is rejected; ids are opaque to the gateway."""
    assert PermissionQuery(user_id="u1", channel_id=-1).channel_id == -1


@pytest.mark.parametrize("channel_id", [True, "5", 1.5])
def test_permission_query_rejects_non_int_channel_id(channel_id: object) -> None:
    with pytest.raises(ValidationException):
        PermissionQuery(user_id="u1", channel_id=channel_id)  # type: ignore[arg-type]


def test_permission_query_is_immutable() -> None:
    query = PermissionQuery(user_id="u1", channel_id=5)
    with pytest.raises(AttributeError):
        query.channel_id = 6  # type: ignore[misc]


def test_lesson_attempt_query_requires_user() -> None:
    with pytest.raises(ValidationException) as exc_info:
        LessonAttemptQuery(user_id="", lesson_attempt_id=1)
    assert exc_info.value.details == {"field": "user_id"}


def test_group_admin_query_requires_group() -> None:
    with pytest.raises(ValidationException) as exc_info:
        GroupAdminQuery(user_id="u1", group_id=" ")
    assert exc_info.value.details == {"field": "group_id"}


def test_group_lookup_result_ok_is_known() -> None:
    result = GroupLookupResult.ok("groups_channel_is_shared_with", ["A", "A", "B"])
    assert result.is_known is True
    assert result.groups == frozenset({"A", "B"})


def test_group_lookup_result_unknown_is_not_empty_known() -> None:
    """A failed lookup is distinguishable from a lookup that found no groups."""
    failed = GroupLookupResult.unknown("groups_where_user_is_admin", RuntimeError("x"))
    empty = GroupLookupResult.ok("groups_where_user_is_admin", [])
    assert failed.is_known is False
    assert empty.is_known is True
    assert failed.groups == empty.groups == frozenset()


def test_authorization_decision_from_bool() -> None:
    assert AuthorizationDecision.from_bool(True) is AuthorizationDecision.GRANTED
    assert AuthorizationDecision.from_bool(False) is AuthorizationDecision.DENIED


def test_group_role_values() -> None:
    assert GroupRole.values() == ["admin", "learner"]
