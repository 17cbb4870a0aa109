"""Pytest configuration and fixtures for taskapi.

The document store is an in-memory Firestore fake (tests/fakes.py) served
through httpx.MockTransport, so the real REST client, encoding and query
building run without a network. Settings come from TASKAPI_* env vars set
below, before the app is built.
"""

import os

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from tests.fakes import PROJECT_ID, STORE_URI, FakeFirestore
from tests.identities import USER_U_ID, USER_V_ID

os.environ["TASKAPI_JWT_SECRET"] = "test-secret-key"
os.environ["TASKAPI_STORE_URI"] = STORE_URI
os.environ["TASKAPI_STORE_PROJECT_ID"] = PROJECT_ID
os.environ["TASKAPI_LOGIN_RATE_LIMIT"] = "1000/minute"
os.environ.pop("TASKAPI_FIREBASE_SERVICE_ACCOUNT_KEY", None)
os.environ.pop("TASKAPI_FIREBASE_SERVICE_ACCOUNT_PATH", None)

from taskapi.core.config import get_settings  # noqa: E402
from taskapi.core.limiter import limiter  # noqa: E402
from taskapi.domain.enums import UserRole  # noqa: E402
from taskapi.infrastructure.firebase import FirestoreRESTClient  # noqa: E402
from taskapi.infrastructure.security.jwt import TokenService  # noqa: E402
from taskapi.main import create_app  # noqa: E402

get_settings.cache_clear()


@pytest.fixture
def fake_store() -> FakeFirestore:
    """Fresh, empty Firestore fake per test."""
    return FakeFirestore()


@pytest.fixture
async def store_client(fake_store: FakeFirestore) -> FirestoreRESTClient:
    """FirestoreRESTClient whose HTTP calls are answered by fake_store."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake_store.handler))
    client = FirestoreRESTClient(PROJECT_ID, base_url=STORE_URI, http_client=http)
    yield client
    await http.aclose()


@pytest.fixture
async def app(store_client: FirestoreRESTClient) -> FastAPI:
    """Application wired to the fake store (replaces the env-built client)."""
    get_settings.cache_clear()
    limiter.reset()
    application = create_app()
    await application.state.store_client.aclose()
    application.state.store_client = store_client
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def token_service(app: FastAPI) -> TokenService:
    return app.state.token_service


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_u_headers(token_service: TokenService) -> dict[str, str]:
    """Authorization headers for ordinary user U."""
    return _bearer(token_service.issue(USER_U_ID, UserRole.USER))


@pytest.fixture
def user_v_headers(token_service: TokenService) -> dict[str, str]:
    """Authorization headers for ordinary user V."""
    return _bearer(token_service.issue(USER_V_ID, UserRole.USER))


@pytest.fixture
def admin_headers(app: FastAPI, token_service: TokenService) -> dict[str, str]:
    """Authorization headers for the synthetic admin minted at app creation."""
    admin = app.state.user_repo.get_by_email(get_settings().admin_email)
    assert admin is not None
    return _bearer(token_service.issue(admin.id, admin.role))
