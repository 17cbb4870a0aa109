"""Smoke tests for health, app wiring and middleware."""

import asyncio

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from taskapi.middleware import TimeoutMiddleware
from tests.fakes import FakeFirestore


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /healthz returns 200 and status ok when the store answers."""
    response = await client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_health_reports_store_down(
    client: AsyncClient, fake_store: FakeFirestore
) -> None:
    fake_store.fail_status = 503
    response = await client.get("/healthz")
    assert response.status_code == 503
    assert response.json() == {
        "error": "database_error",
        "message": "Database connection failed",
    }


async def test_request_id_generated_and_forwarded(client: AsyncClient) -> None:
    response = await client.get("/healthz")
    assert response.headers.get("X-Request-ID")

    response = await client.get("/healthz", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


async def test_unsafe_request_id_replaced(client: AsyncClient) -> None:
    response = await client.get("/healthz", headers={"X-Request-ID": "has spaces"})
    assert response.headers["X-Request-ID"] != "has spaces"


async def test_unknown_route_keeps_error_shape(client: AsyncClient) -> None:
    response = await client.get("/v1/nothing-here")
    assert response.status_code == 404
    assert set(response.json()) == {"error", "message"}


async def test_method_not_allowed_keeps_error_shape(client: AsyncClient) -> None:
    response = await client.put("/healthz")
    assert response.status_code == 405
    assert response.json()["error"] == "method_not_allowed"


async def test_timeout_middleware_answers_504() -> None:
    slow = FastAPI()

    @slow.get("/slow")
    async def slow_route() -> dict:
        await asyncio.sleep(5)
        return {}

    wrapped = TimeoutMiddleware(slow, timeout_seconds=0.05)
    async with AsyncClient(
        transport=ASGITransport(app=wrapped), base_url="http://test"
    ) as ac:
        response = await ac.get("/slow")
    assert response.status_code == 504
    assert response.json()["error"] == "timeout"
