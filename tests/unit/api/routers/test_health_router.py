"""Tests for the health check endpoint."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from clipstats import __version__
from clipstats.api.main import app

pytestmark = pytest.mark.asyncio


async def test_health_reports_version() -> None:
    """Test that /api/health is healthy and reports the version."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == __version__
    assert "timestamp" in data
