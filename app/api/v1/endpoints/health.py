"""Health check endpoints, used for liveness and readiness probes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_cache
from app.infrastructure.cache import TagAwareCacheProtocol
from app.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/ready", response_model=ReadinessResponse)
def readiness_check(
    cache: Annotated[TagAwareCacheProtocol, Depends(get_cache)],
) -> ReadinessResponse:
    """Return 200; a degraded cache does not make the service unready (reads fall through)."""
    return ReadinessResponse(cache="available" if cache.is_available() else "degraded")
