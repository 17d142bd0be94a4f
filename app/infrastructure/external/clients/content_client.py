"""Learning platform (content) service client.

Implements IContentSharingLookup (channel ownership, channel/plan sharing)
and IAttemptOwnership (lesson attempts); both live in the same backend.
"""

from __future__ import annotations

from urllib.parse import quote

import httpx

from app.infrastructure.external.clients._http import get_json, read_flag, read_group_ids

SERVICE_NAME = "lp"


class ContentServiceClient:
    """Access-gating facts from the learning platform service."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    async def is_channel_creator(self, user_id: str, channel_id: int) -> bool:
        body = await get_json(
            self._http,
            SERVICE_NAME,
            "is_channel_creator",
            f"/channels/{channel_id}/creator/{quote(user_id, safe='')}",
        )
        return read_flag(body, "is_creator")

    async def groups_channel_is_shared_with(self, channel_id: int) -> list[str]:
        body = await get_json(
            self._http,
            SERVICE_NAME,
            "groups_channel_is_shared_with",
            f"/channels/{channel_id}/shared-groups",
        )
        return read_group_ids(body)

    async def is_user_shared_with_plan(self, user_id: str, plan_id: int) -> bool:
        body = await get_json(
            self._http,
            SERVICE_NAME,
            "is_user_shared_with_plan",
            f"/plans/{plan_id}/shares/{quote(user_id, safe='')}",
        )
        return read_flag(body, "is_shared")

    async def is_lesson_attempt_owner(self, user_id: str, lesson_attempt_id: int) -> bool:
        body = await get_json(
            self._http,
            SERVICE_NAME,
            "is_lesson_attempt_owner",
            f"/lesson-attempts/{lesson_attempt_id}/owner/{quote(user_id, safe='')}",
        )
        return read_flag(body, "is_owner")
