"""Integration tests for the error response shape."""

from __future__ import annotations

import logging

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.deps import get_user_service


@pytest.mark.asyncio
async def test_unknown_route_uses_error_shape(client):
    response = await client.get("/does-not-exist")

    assert response.status_code == 404
    data = response.json()
    assert data["statusCode"] == 404
    assert data["error"] == "Not Found"
    assert data["path"] == "/does-not-exist"


@pytest.mark.asyncio
async def test_malformed_json_is_bad_request(client):
    response = await client.post(
        "/auth/login", content="{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["statusCode"] == 400


@pytest.mark.asyncio
async def test_unhandled_error_is_sanitised(app, make_user, auth_headers):
    class ExplodingService:
        async def profile(self, actor):
            raise RuntimeError("connection string postgres://secret@db")

    user = make_user()
    app.dependency_overrides[get_user_service] = lambda: ExplodingService()

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False), base_url="http://test"
    ) as ac:
        response = await ac.get("/users/profile", headers=auth_headers(user))

    app.dependency_overrides.clear()
    assert response.status_code == 500
    data = response.json()
    assert data["message"] == "Internal server error"
    assert data["error"] == "Internal Server Error"
    assert "secret" not in response.text


@pytest.mark.asyncio
async def test_unhandled_error_is_logged_with_request_context(app, make_user, auth_headers, caplog):
    class ExplodingService:
        async def profile(self, actor):
            raise RuntimeError("boom")

    user = make_user()
    app.dependency_overrides[get_user_service] = lambda: ExplodingService()
    caplog.set_level(logging.ERROR, logger="app.main")

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False), base_url="http://test"
    ) as ac:
        await ac.get("/users/profile", headers=auth_headers(user))

    app.dependency_overrides.clear()
    messages = [
        r.getMessage() for r in caplog.records if r.name == "app.main" and "Unhandled" in r.getMessage()
    ]
    assert len(messages) == 1
    assert "GET /users/profile" in messages[0]
    assert "boom" in messages[0]
