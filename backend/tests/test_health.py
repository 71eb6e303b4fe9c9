"""Health, root, and fallback handler tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import APIRouter, FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from carebase import database
from carebase.config import settings
from carebase.exceptions import DatabaseConnectionError
from carebase.main import create_app


async def test_root(client: AsyncClient) -> None:
    response = await client.get("/")
    assert response.status_code == 200
    body = response.json()
    assert body["version"] == "1.0.0"
    assert "timestamp" in body


async def test_health_disconnected_before_connect(client: AsyncClient) -> None:
    response = await client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["database"] == "Disconnected"
    assert "/api/patients" in body["endpoints"]


async def test_health_connected(app: FastAPI, client: AsyncClient) -> None:
    await app.state.connection.connect(max_retries=1, initial_delay_ms=0)
    response = await client.get("/api/health")
    assert response.json()["database"] == "Connected"


async def test_unknown_route(client: AsyncClient) -> None:
    response = await client.get("/api/unknown")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Endpoint not found"
    assert body["path"] == "/api/unknown"
    assert "GET    /api/patients" in body["availableEndpoints"]


async def test_unhandled_error_returns_message(app: FastAPI) -> None:
    router = APIRouter()

    @router.get("/api/boom")
    async def boom() -> None:
        raise RuntimeError("something broke")

    app.include_router(router)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/api/boom")

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Internal server error",
        "message": "something broke",
    }


async def test_cors_allows_configured_origin(client: AsyncClient) -> None:
    response = await client.options(
        "/api/patients",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


async def test_unsupported_method_lists_endpoints(client: AsyncClient) -> None:
    response = await client.patch("/api/patients", json={})
    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "Endpoint not found"
    assert body["path"] == "/api/patients"
    assert "PUT    /api/patients/:id" in body["availableEndpoints"]


async def test_lifespan_connects_and_disconnects(
    app: FastAPI, client: AsyncClient
) -> None:
    async with app.router.lifespan_context(app):
        response = await client.get("/api/health")
        assert response.json()["database"] == "Connected"

    response = await client.get("/api/health")
    assert response.json()["database"] == "Disconnected"


async def test_lifespan_aborts_startup_when_database_unreachable(
    tmp_path, mocker, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(settings, "db_max_retries", 3)
    monkeypatch.setattr(settings, "db_retry_delay_ms", 10)
    sleep = mocker.patch.object(database.asyncio, "sleep", new_callable=AsyncMock)
    # A directory cannot be opened as a SQLite database file
    unreachable = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}")
    app = create_app(unreachable)

    with pytest.raises(DatabaseConnectionError) as exc_info:
        async with app.router.lifespan_context(app):
            pytest.fail("application started without a database")

    assert exc_info.value.attempts == 3
    assert sleep.call_count == 2
    assert not app.state.connection.is_connected
    await unreachable.dispose()
