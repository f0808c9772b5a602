"""Health check endpoints for liveness and readiness probes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from intellecty.api.dependencies import CacheDep, SettingsDep
from intellecty.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Cache enabled but unreachable", "model": ReadinessResponse}},
)
async def readiness_check(cache: CacheDep, settings: SettingsDep) -> ReadinessResponse | JSONResponse:
    """Return 200 when the cache is disabled or answers PING; 503 otherwise."""
    if not settings.redis_enabled:
        return ReadinessResponse(cache="disabled")
    if await cache.ping():
        return ReadinessResponse()
    return JSONResponse(
        status_code=503,
        content=ReadinessResponse(status="not_ready", cache="unavailable").model_dump(),
    )
