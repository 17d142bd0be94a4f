"""Identity (SSO) service client (implements IIdentityGroupLookup)."""

from __future__ import annotations

from urllib.parse import quote

import httpx

from app.domain.enums import GroupRole
from app.infrastructure.external.clients._http import get_json, read_flag, read_group_ids

SERVICE_NAME = "sso"


class IdentityServiceClient:
    """Learning-group membership lookups against the SSO service."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        """Args:
        http_client: AsyncClient whose base_url points at the SSO service.
        """
        self._http = http_client

    async def _groups_for_role(self, user_id: str, role: GroupRole) -> list[str]:
        body = await get_json(
            self._http,
            SERVICE_NAME,
            f"groups_where_user_is_{role.value}",
            f"/users/{quote(user_id, safe='')}/groups",
            params={"role": role.value},
        )
        return read_group_ids(body)

    async def groups_where_user_is_admin(self, user_id: str) -> list[str]:
        return await self._groups_for_role(user_id, GroupRole.ADMIN)

    async def groups_where_user_is_learner(self, user_id: str) -> list[str]:
        return await self._groups_for_role(user_id, GroupRole.LEARNER)

    async def is_group_admin(self, user_id: str, group_id: str) -> bool:
        body = await get_json(
            self._http,
            SERVICE_NAME,
            "is_group_admin",
            f"/groups/{quote(group_id, safe='')}/admins/{quote(user_id, safe='')}",
        )
        return read_flag(body, "is_group_admin")
