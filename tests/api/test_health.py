"""Smoke tests for health and app wiring."""

from httpx import AsyncClient

from app.infrastructure.cache import RedisTagAwareCache
from app.api.v1.dependencies import get_cache
from app.main import app


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json().get("status") == "ok"


async def test_ready_reports_available_cache(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "cache": "available"}


async def test_ready_reports_degraded_cache(client: AsyncClient) -> None:
    """A disconnected Redis cache degrades reads but keeps the service ready."""
    app.dependency_overrides[get_cache] = lambda: RedisTagAwareCache(namespace="test")
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["cache"] == "degraded"
