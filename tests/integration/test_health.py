"""Integration tests for the /health endpoint."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.mark.asyncio
async def test_health_ok_when_database_answers(app, client):
    app.state.database = MagicMock(ping=AsyncMock(return_value=None))

    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == "ok"
    assert data["service"] == "auth-service"
    assert "timestamp" in data


@pytest.mark.asyncio
async def test_health_degraded_when_database_fails(app, client):
    app.state.database = MagicMock(ping=AsyncMock(side_effect=ConnectionRefusedError("db down")))

    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert response.json()["database"] == "unavailable"


@pytest.mark.asyncio
async def test_response_carries_request_id(app, client):
    app.state.database = MagicMock(ping=AsyncMock(return_value=None))

    response = await client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
