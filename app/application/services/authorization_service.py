"""Authorization service: channel, plan, lesson-attempt and group-admin checks.

Combines a fast ownership check with a group-membership intersection:

1. The channel creator is always granted (no group lookups).
2. Otherwise the user's role-appropriate groups and the channel's shared
   groups are fetched concurrently and intersected.
3. No overlap is a denial. Overlap with no plan is a grant. Overlap with a
   plan additionally requires the plan to be shared with the user (AND,
   never OR).

check_* methods return True/False; denial is a decision, not an error.
require_* methods raise AuthorizationException on denial. Backend or cache
failures at the ownership, intersection and plan-share steps raise
AuthorizationUnavailableException. Group lookup failures follow the
configured LookupFailurePolicy.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from app.application.dtos.permission import GroupLookupResult
from app.application.interfaces.services import (
    IAttemptOwnership,
    IContentSharingLookup,
    IGroupIntersector,
    IIdentityGroupLookup,
)
from app.domain.enums import AuthorizationDecision, GroupRole, LookupFailurePolicy
from app.domain.exceptions import (
    AuthorizationException,
    AuthorizationUnavailableException,
    ValidationException,
)
from app.domain.value_objects.core import (
    GroupAdminQuery,
    LessonAttemptQuery,
    PermissionQuery,
)
from app.shared.telemetry.tracing import add_span_attributes, add_span_event, traced

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AuthorizationService:
    """Decides whether a principal may read or mutate channels, plans and attempts."""

    def __init__(
        self,
        identity: IIdentityGroupLookup,
        content: IContentSharingLookup,
        attempts: IAttemptOwnership,
        intersector: IGroupIntersector,
        lookup_failure_policy: LookupFailurePolicy = LookupFailurePolicy.DENY,
    ) -> None:
        self.identity = identity
        self.content = content
        self.attempts = attempts
        self.intersector = intersector
        self.lookup_failure_policy = lookup_failure_policy

    @traced("authorization.check_creator_or_admin_and_share")
    async def check_creator_or_admin_and_share(self, query: PermissionQuery) -> bool:
        """Gate for mutating operations: creator, or admin of a group the channel is shared with."""
        return await self._check_channel_access(query, GroupRole.ADMIN)

    @traced("authorization.check_creator_or_learner_and_share")
    async def check_creator_or_learner_and_share(self, query: PermissionQuery) -> bool:
        """Gate for read/participate operations: creator, or learner in a shared group."""
        return await self._check_channel_access(query, GroupRole.LEARNER)

    @traced("authorization.check_lesson_attempt")
    async def check_lesson_attempt(self, query: LessonAttemptQuery) -> bool:
        """Return True if the lesson attempt belongs to the user."""
        if not isinstance(query, LessonAttemptQuery):
            raise ValidationException("Invalid lesson attempt query")
        add_span_attributes(
            user_id=query.user_id, lesson_attempt_id=query.lesson_attempt_id
        )
        is_owner = await self._call(
            "is_lesson_attempt_owner",
            self.attempts.is_lesson_attempt_owner(
                query.user_id, query.lesson_attempt_id
            ),
        )
        logger.info(
            "Lesson attempt %s for user %s: %s",
            query.lesson_attempt_id,
            query.user_id,
            AuthorizationDecision.from_bool(is_owner).value,
        )
        return bool(is_owner)

    @traced("authorization.is_group_admin")
    async def is_group_admin(self, query: GroupAdminQuery) -> bool:
        """Return True if the user administers the group (e.g. before creating a channel in it)."""
        if not isinstance(query, GroupAdminQuery):
            raise ValidationException("Invalid group admin query")
        add_span_attributes(user_id=query.user_id, group_id=query.group_id)
        is_admin = await self._call(
            "is_group_admin",
            self.identity.is_group_admin(query.user_id, query.group_id),
        )
        logger.info(
            "Group admin check for user %s in group %s: %s",
            query.user_id,
            query.group_id,
            AuthorizationDecision.from_bool(is_admin).value,
        )
        return bool(is_admin)

    async def require_creator_or_admin_and_share(self, query: PermissionQuery) -> None:
        """Raise AuthorizationException unless the user may manage the channel/plan."""
        if not await self.check_creator_or_admin_and_share(query):
            raise AuthorizationException(resource=_resource(query), action="manage")

    async def require_creator_or_learner_and_share(self, query: PermissionQuery) -> None:
        """Raise AuthorizationException unless the user may access the channel/plan."""
        if not await self.check_creator_or_learner_and_share(query):
            raise AuthorizationException(resource=_resource(query), action="access")

    async def require_lesson_attempt(self, query: LessonAttemptQuery) -> None:
        """Raise AuthorizationException unless the lesson attempt belongs to the user."""
        if not await self.check_lesson_attempt(query):
            raise AuthorizationException(resource="lesson_attempt", action="access")

    async def require_group_admin(self, query: GroupAdminQuery) -> None:
        """Raise AuthorizationException unless the user administers the group."""
        if not await self.is_group_admin(query):
            raise AuthorizationException(resource="learning_group", action="manage")

    async def _check_channel_access(self, query: PermissionQuery, role: GroupRole) -> bool:
        if not isinstance(query, PermissionQuery):
            raise ValidationException("Invalid permission query")
        self.intersector.validate_user_id(query.user_id)
        add_span_attributes(
            user_id=query.user_id,
            channel_id=query.channel_id,
            plan_id=query.plan_id,
            role=role.value,
        )
        add_span_event("validation_completed")

        is_creator = await self._call(
            "is_channel_creator",
            self.content.is_channel_creator(query.user_id, query.channel_id),
        )
        if is_creator:
            add_span_event("user_is_channel_creator")
            logger.info(
                "User %s is creator of channel %s: granted",
                query.user_id,
                query.channel_id,
            )
            return True

        user_groups, shared_groups = await asyncio.gather(
            self._lookup_groups(
                f"groups_where_user_is_{role.value}",
                self._user_groups(query.user_id, role),
            ),
            self._lookup_groups(
                "groups_channel_is_shared_with",
                self.content.groups_channel_is_shared_with(query.channel_id),
            ),
        )
        add_span_event(
            "fetch_groups_completed",
            {
                "user_groups_known": user_groups.is_known,
                "shared_groups_known": shared_groups.is_known,
            },
        )
        for result in (user_groups, shared_groups):
            if result.is_known:
                continue
            if self.lookup_failure_policy is LookupFailurePolicy.RAISE:
                raise AuthorizationUnavailableException(
                    result.source, str(result.error)
                ) from result.error
            return self._deny(query, f"{result.source}_failed")

        overlap = await self._call(
            "groups_intersection",
            self.intersector.intersect(
                query.user_id,
                query.channel_id,
                user_groups.groups,
                shared_groups.groups,
            ),
        )
        add_span_event(
            "groups_intersection_completed", {"has_intersection": bool(overlap)}
        )
        if not overlap:
            return self._deny(query, "no_group_intersection")

        if not query.has_plan:
            logger.info(
                "User %s granted on channel %s by %s groups",
                query.user_id,
                query.channel_id,
                role.value,
            )
            return True

        is_shared = await self._call(
            "is_user_shared_with_plan",
            self.content.is_user_shared_with_plan(query.user_id, query.plan_id),
        )
        add_span_event("plan_share_checked", {"is_shared": bool(is_shared)})
        if not is_shared:
            return self._deny(query, "no_access_to_plan")
        logger.info(
            "User %s granted on plan %s in channel %s",
            query.user_id,
            query.plan_id,
            query.channel_id,
        )
        return True

    def _user_groups(self, user_id: str, role: GroupRole) -> Awaitable[list[str]]:
        if role is GroupRole.ADMIN:
            return self.identity.groups_where_user_is_admin(user_id)
        return self.identity.groups_where_user_is_learner(user_id)

    async def _lookup_groups(
        self, source: str, lookup: Awaitable[list[str]]
    ) -> GroupLookupResult:
        """Await a group lookup; a failure becomes an explicit unknown result."""
        try:
            return GroupLookupResult.ok(source, await lookup)
        except Exception as e:
            logger.error("Group lookup %s failed: %s", source, e)
            return GroupLookupResult.unknown(source, e)

    async def _call(self, operation: str, step: Awaitable[T]) -> T:
        """Await a hard-propagated step; infrastructure failures become AuthorizationUnavailableException."""
        try:
            return await step
        except ValidationException:
            raise
        except Exception as e:
            logger.error("Authorization step %s failed: %s", operation, e)
            add_span_event(f"{operation}_failed", {"error": str(e)})
            raise AuthorizationUnavailableException(operation, str(e)) from e

    def _deny(self, query: PermissionQuery, reason: str) -> bool:
        add_span_event("permission_denied", {"reason": reason})
        logger.warning(
            "Permission denied for user %s on channel %s (plan %s): %s",
            query.user_id,
            query.channel_id,
            query.plan_id,
            reason,
        )
        return False


def _resource(query: PermissionQuery) -> str:
    return "plan" if query.has_plan else "channel"
