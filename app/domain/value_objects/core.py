"""Domain value objects for authorization queries.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value. Invalid construction
raises ValidationException so callers fail fast before any remote call.
"""

from dataclasses import dataclass

from app.core.constants import NO_PLAN_ID
from app.domain.exceptions import ValidationException


def _require_non_empty(value: str, field_name: str) -> None:
    """Raise ValidationException if value is not a non-blank string."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationException(f"{field_name} is required", field=field_name)


def _require_non_zero(value: int, field_name: str) -> None:
    """Raise ValidationException if value is not a non-zero integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value == 0:
        raise ValidationException(
            f"{field_name} must be a non-zero integer", field=field_name
        )


@dataclass(frozen=True)
class PermissionQuery:
    """Who wants access to which channel (and optionally which plan in it).

    plan_id == 0 is a sentinel meaning "no plan-level gate", not a real id.
    """

    user_id: str
    channel_id: int
    plan_id: int = NO_PLAN_ID

    def __post_init__(self) -> None:
        _require_non_empty(self.user_id, "user_id")
        _require_non_zero(self.channel_id, "channel_id")
        if isinstance(self.plan_id, bool) or not isinstance(self.plan_id, int):
            raise ValidationException("plan_id must be an integer", field="plan_id")

    @property
    def has_plan(self) -> bool:
        """True when a plan-level gate applies."""
        return self.plan_id != NO_PLAN_ID


@dataclass(frozen=True)
class LessonAttemptQuery:
    """Ownership question for one lesson attempt."""

    user_id: str
    lesson_attempt_id: int

    def __post_init__(self) -> None:
        _require_non_empty(self.user_id, "user_id")
        _require_non_zero(self.lesson_attempt_id, "lesson_attempt_id")


@dataclass(frozen=True)
class GroupAdminQuery:
    """Is user_id an admin of learning group group_id."""

    user_id: str
    group_id: str

    def __post_init__(self) -> None:
        _require_non_empty(self.user_id, "user_id")
        _require_non_empty(self.group_id, "group_id")
