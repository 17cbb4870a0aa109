"""Application lifespan: startup and shutdown.

Single place for startup/shutdown logic. Used by main.py. The services
themselves are built in create_app() so they exist even when the lifespan
is not run (e.g. httpx ASGITransport in tests); here they are announced on
startup and released on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from taskapi.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit close the store client."""
    settings = get_settings()

    # ---- Startup ----
    if settings.uses_default_jwt_secret:
        logger.warning(
            "TASKAPI_JWT_SECRET is the built-in default; set a real secret outside development"
        )
    store_client = getattr(app.state, "store_client", None)
    if store_client is not None:
        logger.info(
            "Store client ready (project %s, database %s)",
            store_client.project_id,
            store_client.database,
        )
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "store_client", None) is not None:
        await app.state.store_client.aclose()
        app.state.store_client = None
        logger.info("Store client closed")
