"""Health check endpoint: 200 when the document store answers, else 503."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from taskapi.api.v1.dependencies import get_task_repo
from taskapi.application.interfaces.repositories import ITaskRepository
from taskapi.schemas.errors import ErrorResponse
from taskapi.schemas.health import HealthResponse

router = APIRouter()


@router.get(
    "/healthz",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": ErrorResponse}},
)
async def health_check(
    task_repo: Annotated[ITaskRepository, Depends(get_task_repo)],
) -> HealthResponse | JSONResponse:
    """Return ok if a store round-trip succeeds within the store timeout."""
    if await task_repo.ping():
        return HealthResponse()
    return JSONResponse(
        status_code=503,
        content=ErrorResponse(
            error="database_error",
            message="Database connection failed",
        ).model_dump(),
    )
