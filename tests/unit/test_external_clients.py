"""Identity and content service clients against an httpx.MockTransport."""

import httpx
import pytest

from app.infrastructure.exceptions import UpstreamServiceError
from app.infrastructure.external.clients import (
    ContentServiceClient,
    IdentityServiceClient,
)


def _client(routes: dict[str, httpx.Response], seen: list[httpx.Request] | None = None) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return routes.get(request.url.path, httpx.Response(404))

    return httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://backend"
    )


async def test_groups_where_user_is_admin_sends_role() -> None:
    seen: list[httpx.Request] = []
    http = _client(
        {"/users/u1/groups": httpx.Response(200, json={"group_ids": ["g1", 2]})}, seen
    )

    groups = await IdentityServiceClient(http).groups_where_user_is_admin("u1")

    assert groups == ["g1", "2"]
    assert seen[0].url.params["role"] == "admin"


async def test_groups_where_user_is_learner_sends_role() -> None:
    seen: list[httpx.Request] = []
    http = _client({"/users/u1/groups": httpx.Response(200, json={"group_ids": []})}, seen)

    assert await IdentityServiceClient(http).groups_where_user_is_learner("u1") == []
    assert seen[0].url.params["role"] == "learner"


async def test_unknown_user_has_no_groups() -> None:
    http = _client({})
    assert await IdentityServiceClient(http).groups_where_user_is_admin("ghost") == []


async def test_is_group_admin() -> None:
    http = _client(
        {"/groups/g1/admins/u1": httpx.Response(200, json={"is_group_admin": True})}
    )
    assert await IdentityServiceClient(http).is_group_admin("u1", "g1") is True


async def test_is_channel_creator() -> None:
    http = _client({"/channels/7/creator/u1": httpx.Response(200, json={"is_creator": True})})
    assert await ContentServiceClient(http).is_channel_creator("u1", 7) is True


async def test_groups_channel_is_shared_with() -> None:
    http = _client(
        {"/channels/7/shared-groups": httpx.Response(200, json={"group_ids": ["B", "C"]})}
    )
    assert await ContentServiceClient(http).groups_channel_is_shared_with(7) == ["B", "C"]


async def test_is_user_shared_with_plan_missing_is_false() -> None:
    http = _client({})
    assert await ContentServiceClient(http).is_user_shared_with_plan("u1", 3) is False


async def test_is_lesson_attempt_owner() -> None:
    http = _client(
        {"/lesson-attempts/42/owner/u1": httpx.Response(200, json={"is_owner": True})}
    )
    assert await ContentServiceClient(http).is_lesson_attempt_owner("u1", 42) is True


async def test_server_error_raises_upstream_error() -> None:
    http = _client({"/channels/7/creator/u1": httpx.Response(500)})

    with pytest.raises(UpstreamServiceError) as exc_info:
        await ContentServiceClient(http).is_channel_creator("u1", 7)

    assert exc_info.value.details["service"] == "lp"
    assert exc_info.value.details["status_code"] == 500


async def test_transport_error_raises_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://sso")

    with pytest.raises(UpstreamServiceError) as exc_info:
        await IdentityServiceClient(http).groups_where_user_is_learner("u1")
    assert exc_info.value.details["operation"] == "groups_where_user_is_learner"


async def test_non_object_body_raises_upstream_error() -> None:
    http = _client({"/channels/7/shared-groups": httpx.Response(200, json=["B"])})

    with pytest.raises(UpstreamServiceError):
        await ContentServiceClient(http).groups_channel_is_shared_with(7)


async def test_user_id_is_path_quoted() -> None:
    seen: list[httpx.Request] = []
    http = _client({}, seen)

    await ContentServiceClient(http).is_channel_creator("a/b", 7)

    assert seen[0].url.raw_path.startswith(b"/channels/7/creator/a%2Fb")
