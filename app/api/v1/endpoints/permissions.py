"""Permissions API: channel/plan, lesson attempt and group admin checks."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_authorization_service
from app.application.services.authorization_service import AuthorizationService
from app.domain.value_objects.core import (
    GroupAdminQuery,
    LessonAttemptQuery,
    PermissionQuery,
)
from app.schemas.permission import (
    ChannelPermissionRequest,
    GroupAdminPermissionRequest,
    LessonAttemptPermissionRequest,
    PermissionCheckResponse,
)

router = APIRouter()

AuthorizationServiceDep = Annotated[
    AuthorizationService, Depends(get_authorization_service)
]


@router.post("/channels/manage", response_model=PermissionCheckResponse)
async def check_channel_manage(
    body: ChannelPermissionRequest,
    authz: AuthorizationServiceDep,
) -> PermissionCheckResponse:
    """May the user mutate the channel (and plan, when plan_id is set)?

    Granted for the channel creator, or for an admin of a group the channel
    is shared with (plus an explicit plan share when plan_id is set).
    """
    query = PermissionQuery(
        user_id=body.user_id, channel_id=body.channel_id, plan_id=body.plan_id
    )
    granted = await authz.check_creator_or_admin_and_share(query)
    return PermissionCheckResponse.from_granted(granted)


@router.post("/channels/access", response_model=PermissionCheckResponse)
async def check_channel_access(
    body: ChannelPermissionRequest,
    authz: AuthorizationServiceDep,
) -> PermissionCheckResponse:
    """May the user read/participate in the channel (and plan, when set)?"""
    query = PermissionQuery(
        user_id=body.user_id, channel_id=body.channel_id, plan_id=body.plan_id
    )
    granted = await authz.check_creator_or_learner_and_share(query)
    return PermissionCheckResponse.from_granted(granted)


@router.post("/lesson-attempts", response_model=PermissionCheckResponse)
async def check_lesson_attempt(
    body: LessonAttemptPermissionRequest,
    authz: AuthorizationServiceDep,
) -> PermissionCheckResponse:
    """Does the lesson attempt belong to the user?"""
    query = LessonAttemptQuery(
        user_id=body.user_id, lesson_attempt_id=body.lesson_attempt_id
    )
    granted = await authz.check_lesson_attempt(query)
    return PermissionCheckResponse.from_granted(granted)


@router.post("/groups/admin", response_model=PermissionCheckResponse)
async def check_group_admin(
    body: GroupAdminPermissionRequest,
    authz: AuthorizationServiceDep,
) -> PermissionCheckResponse:
    """Is the user an admin of the learning group?"""
    query = GroupAdminQuery(user_id=body.user_id, group_id=body.group_id)
    granted = await authz.is_group_admin(query)
    return PermissionCheckResponse.from_granted(granted)
