"""Shared JSON-over-HTTP request helper for backend service clients.

All calls use httpx.AsyncClient so they do not block the event loop.
Transport errors and unexpected statuses become UpstreamServiceError.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.infrastructure.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)

_NOT_FOUND = 404


async def get_json(
    client: httpx.AsyncClient,
    service: str,
    operation: str,
    path: str,
    params: dict[str, Any] | None = None,
) -> dict[str, Any] | None:
    """GET path and return the decoded JSON body. 404 returns None.

    Raises:
        UpstreamServiceError: On transport failure, non-2xx status (other
            than 404) or a body that is not a JSON object.
    """
    try:
        resp = await client.get(path, params=params)
    except httpx.HTTPError as e:
        logger.error("%s %s transport error: %s", service, operation, e)
        raise UpstreamServiceError(service, operation, str(e) or type(e).__name__) from e
    if resp.status_code == _NOT_FOUND:
        return None
    if not resp.is_success:
        logger.error(
            "%s %s returned status %s", service, operation, resp.status_code
        )
        raise UpstreamServiceError(
            service, operation, f"unexpected status {resp.status_code}", resp.status_code
        )
    try:
        body = resp.json()
    except ValueError as e:
        raise UpstreamServiceError(service, operation, "invalid JSON body", resp.status_code) from e
    if not isinstance(body, dict):
        raise UpstreamServiceError(service, operation, "expected a JSON object", resp.status_code)
    return body


def read_flag(body: dict[str, Any] | None, field: str) -> bool:
    """Return body[field] as bool; a missing body (404) means False."""
    if body is None:
        return False
    return bool(body.get(field, False))


def read_group_ids(body: dict[str, Any] | None) -> list[str]:
    """Return body['group_ids'] as a list of strings; a missing body (404) means no groups."""
    if body is None:
        return []
    return [str(group_id) for group_id in body.get("group_ids") or []]
