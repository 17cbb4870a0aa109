"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from taskapi.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from taskapi.api.v1.endpoints import auth, health, tasks

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/v1", tags=["auth"])
api_router.include_router(tasks.router, prefix="/v1/tasks", tags=["tasks"])
