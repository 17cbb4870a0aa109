"""Login endpoint and Authorization header handling."""

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from taskapi.core.config import get_settings
from taskapi.core.limiter import limiter
from taskapi.domain.enums import UserRole


async def test_login_returns_token_and_user(client: AsyncClient, app: FastAPI) -> None:
    """POST /v1/login with the admin credentials returns a flat {token, user}."""
    response = await client.post(
        "/v1/login", json={"email": "admin@example.com", "password": "admin123"}
    )
    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"token", "user"}
    assert data["user"]["email"] == "admin@example.com"
    assert data["user"]["role"] == "admin"
    assert "password" not in data["user"]
    assert "password_hash" not in data["user"]

    claims = app.state.token_service.verify(data["token"])
    assert claims.user_id == data["user"]["id"]
    assert claims.role == UserRole.ADMIN


async def test_login_token_authorizes_requests(client: AsyncClient) -> None:
    login = await client.post(
        "/v1/login", json={"email": "admin@example.com", "password": "admin123"}
    )
    token = login.json()["token"]
    response = await client.get("/v1/tasks", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json() == {"data": []}


async def test_login_wrong_password(client: AsyncClient) -> None:
    response = await client.post(
        "/v1/login", json={"email": "admin@example.com", "password": "wrong-one"}
    )
    assert response.status_code == 401
    assert response.json() == {
        "error": "invalid_credentials",
        "message": "Invalid email or password",
    }


async def test_login_unknown_email(client: AsyncClient) -> None:
    response = await client.post(
        "/v1/login", json={"email": "ghost@example.com", "password": "admin123"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "invalid_credentials"


async def test_login_malformed_json(client: AsyncClient) -> None:
    response = await client.post(
        "/v1/login",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "invalid_request", "message": "Invalid JSON"}


@pytest.mark.parametrize(
    "body",
    [
        {"email": "not-an-email", "password": "admin123"},
        {"email": "admin@example.com", "password": "short"},
        {"email": "admin@example.com"},
    ],
)
async def test_login_invalid_body(client: AsyncClient, body: dict) -> None:
    response = await client.post("/v1/login", json=body)
    assert response.status_code == 400
    data = response.json()
    assert set(data) == {"error", "message"}
    assert data["error"] == "validation_error"


async def test_missing_authorization(client: AsyncClient) -> None:
    response = await client.get("/v1/tasks")
    assert response.status_code == 401
    assert response.json() == {
        "error": "missing_authorization",
        "message": "Authorization header required",
    }


@pytest.mark.parametrize("header", ["Basic abc", "Token xyz", "Bearer", "Bearer   "])
async def test_non_bearer_authorization(client: AsyncClient, header: str) -> None:
    response = await client.get("/v1/tasks", headers={"Authorization": header})
    assert response.status_code == 401
    assert response.json()["error"] == "invalid_authorization"


async def test_invalid_token(client: AsyncClient) -> None:
    response = await client.get(
        "/v1/tasks", headers={"Authorization": "Bearer not.a.token"}
    )
    assert response.status_code == 401
    assert response.json() == {
        "error": "invalid_token",
        "message": "Invalid or expired token",
    }


async def test_login_rate_limited(
    client: AsyncClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    """The login limit is read per request; exceeding it answers 429."""
    monkeypatch.setenv("TASKAPI_LOGIN_RATE_LIMIT", "2/minute")
    get_settings.cache_clear()
    body = {"email": "admin@example.com", "password": "admin123"}
    try:
        assert (await client.post("/v1/login", json=body)).status_code == 200
        assert (await client.post("/v1/login", json=body)).status_code == 200
        response = await client.post("/v1/login", json=body)
        assert response.status_code == 429
        assert response.json()["error"] == "rate_limited"
    finally:
        limiter.reset()
        monkeypatch.undo()
        get_settings.cache_clear()
