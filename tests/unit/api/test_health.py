"""Tests for GET /health: 200, identity echoed, environment and version present."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_returns_200_with_identity(async_client: AsyncClient):
    r = await async_client.get("/health", headers={"X-Identity-ID": "u1"})
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["identity_id"] == "u1"
    assert "correlation_id" in data
    assert "environment" in data
    assert "version" in data
