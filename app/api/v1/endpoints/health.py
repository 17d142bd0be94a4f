"""Health check endpoint. No dependencies; used for liveness and readiness probes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Not ready (e.g. Redis unavailable)", "model": ReadinessErrorResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 if ready; 503 if the redis intersection backend is configured but Redis is down.

    With the local backend Redis is not on the decision path, so readiness
    does not depend on it.
    """
    backend = get_settings().permission_intersection_backend
    if backend != "redis":
        return ReadinessResponse(intersection_backend=backend)

    cache = getattr(request.app.state, "cache", None)
    if cache is not None and await cache.ensure_connected():
        return ReadinessResponse(intersection_backend=backend)
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(
            status="not_ready",
            message="Redis set cache unavailable",
        ).model_dump(),
    )
