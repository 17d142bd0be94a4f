"""Request timeout middleware.

Bounds a whole permission check (creator lookup, group fetches, intersection,
plan share) by a wall-clock budget. Raw ASGI; on expiry the in-flight backend
calls are cancelled and a 504 in the gateway error envelope is returned,
unless the response has already started.
"""

import asyncio
import json
import logging
from typing import Callable

logger = logging.getLogger(__name__)

GATEWAY_TIMEOUT_CODE = "GATEWAY_TIMEOUT"


def _timeout_body(timeout_seconds: float, request_id: str | None) -> bytes:
    details: dict = {"timeout_seconds": timeout_seconds}
    if request_id:
        details["request_id"] = request_id
    return json.dumps(
        {
            "error": GATEWAY_TIMEOUT_CODE,
            "message": f"Request timed out after {timeout_seconds} seconds",
            "details": details,
        }
    ).encode()


def TimeoutMiddleware(app: Callable, timeout_seconds: float) -> Callable:
    """Cancel request after timeout_seconds (sends 504 on timeout). Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: dict) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(
                app(scope, receive, send_wrapper),
                timeout=float(timeout_seconds),
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Request timed out after %s seconds: %s %s",
                timeout_seconds,
                scope.get("method", ""),
                scope.get("path", ""),
            )
            if response_started:
                return
            request_id = scope.get("state", {}).get("request_id")
            await send({
                "type": "http.response.start",
                "status": 504,
                "headers": [(b"content-type", b"application/json")],
            })
            await send({
                "type": "http.response.body",
                "body": _timeout_body(timeout_seconds, request_id),
                "more_body": False,
            })

    return asgi_app
