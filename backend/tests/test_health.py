"""
Rentomatic Backend - Health Check Tests
========================================
"""

from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from rentomatic import __version__
from rentomatic.main import create_app


@pytest.mark.asyncio
async def test_health_memory_backend(test_client):
    response = await test_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["version"] == __version__
    assert body["repository"] == "memory"
    assert body["database"] == "not_applicable"
    assert body["uptime_seconds"] >= 0


@pytest.mark.asyncio
async def test_health_with_reachable_database(memory_settings, mem_repo, sqlite_engine):
    app = create_app(memory_settings, room_repository=mem_repo)
    app.state.engine = sqlite_engine

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"] == "connected"


@pytest.mark.asyncio
async def test_health_with_unreachable_database(memory_settings, mem_repo):
    app = create_app(memory_settings, room_repository=mem_repo)
    engine = MagicMock()
    engine.connect.side_effect = OSError("Connection refused")
    app.state.engine = engine

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/health")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "unhealthy"
    assert body["database"] == "disconnected"
