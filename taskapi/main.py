"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers, and the
process-wide services on app.state. No business logic here. See
taskapi.core.lifespan and taskapi.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskapi.api.v1 import api_router
from taskapi.core.config import get_settings
from taskapi.core.exception_handlers import register_exception_handlers
from taskapi.core.lifespan import create_lifespan
from taskapi.core.limiter import limiter
from taskapi.infrastructure.firebase import create_firestore_client
from taskapi.infrastructure.security.jwt import TokenService
from taskapi.infrastructure.users import InMemoryUserRepository
from taskapi.middleware import (
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    TimeoutMiddleware,
)
from taskapi.shared.telemetry.logging import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    # Process-wide services; immutable after this point.
    app.state.token_service = TokenService.from_settings(settings)
    app.state.user_repo = InMemoryUserRepository.with_admin(
        settings.admin_email, settings.admin_password.get_secret_value()
    )
    app.state.store_client = create_firestore_client(settings)

    app.state.limiter = limiter

    register_exception_handlers(app)

    # Middleware: last added = outermost. Order: timeout → request ID → request logging → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(api_router)

    return app


app = create_app()
