"""Task API: thin routes delegating to TaskService.

All routes require a bearer token. Single-task reads are open to any caller;
updates and deletes need ownership or the admin role; listing is scoped to
the caller unless admin.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, Response

from taskapi.api.v1.dependencies import CurrentClaims, get_task_service
from taskapi.application.dtos.task import TaskFilter
from taskapi.application.use_cases.tasks import TaskService
from taskapi.domain.exceptions import InvalidRequestException
from taskapi.schemas.errors import ERROR_RESPONSES
from taskapi.schemas.task import (
    TaskCreateRequest,
    TaskEnvelope,
    TaskListEnvelope,
    TaskResponse,
)
from taskapi.shared.utils.generators import is_valid_id

router = APIRouter()

TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]


def _require_task_id(task_id: str) -> str:
    """Reject ids that cannot have been generated by the store (400 invalid_id)."""
    if not is_valid_id(task_id):
        raise InvalidRequestException("Invalid task ID", "invalid_id")
    return task_id


def _parse_int(raw: str | None) -> int | None:
    """Lenient integer parse for pagination; unparseable values are ignored."""
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


@router.post(
    "",
    response_model=TaskEnvelope,
    status_code=201,
    responses=ERROR_RESPONSES,
)
async def create_task(
    body: TaskCreateRequest,
    claims: CurrentClaims,
    service: TaskServiceDep,
):
    """Create a task owned by the caller. Empty status defaults to open."""
    task = await service.create_task(
        claims,
        title=body.title,
        description=body.description,
        status=body.status,
    )
    return TaskEnvelope(data=TaskResponse.model_validate(task))


@router.get("", response_model=TaskListEnvelope, responses=ERROR_RESPONSES)
async def list_tasks(
    claims: CurrentClaims,
    service: TaskServiceDep,
    limit: str | None = Query(default=None, description="Page size (> 0; default 10)"),
    offset: str | None = Query(default=None, description="Items to skip (>= 0; default 0)"),
    status_filter: str | None = Query(default=None, alias="status"),
    owner: str | None = Query(default=None, description="Owner id (admins only)"),
    search: str | None = Query(default=None, description="Words to match in title/description"),
):
    """List live tasks, newest first. Non-admins only ever see their own."""
    task_filter = TaskFilter.with_pagination(
        owner_id=owner if owner and is_valid_id(owner) else None,
        status=status_filter,
        search=search,
        limit=_parse_int(limit),
        offset=_parse_int(offset),
    )
    tasks = await service.list_tasks(claims, task_filter)
    return TaskListEnvelope(data=[TaskResponse.model_validate(t) for t in tasks])


@router.get("/{task_id}", response_model=TaskEnvelope, responses=ERROR_RESPONSES)
async def get_task(
    task_id: str,
    claims: CurrentClaims,
    service: TaskServiceDep,
):
    """Return a task by id (404 if absent or deleted)."""
    task = await service.get_task(claims, _require_task_id(task_id))
    return TaskEnvelope(data=TaskResponse.model_validate(task))


@router.patch("/{task_id}", response_model=TaskEnvelope, responses=ERROR_RESPONSES)
async def update_task(
    task_id: str,
    updates: Annotated[dict[str, Any], Body()],
    claims: CurrentClaims,
    service: TaskServiceDep,
):
    """Update title, description and/or status; other keys are ignored."""
    task = await service.update_task(claims, _require_task_id(task_id), updates)
    return TaskEnvelope(data=TaskResponse.model_validate(task))


@router.delete("/{task_id}", status_code=204, responses=ERROR_RESPONSES)
async def delete_task(
    task_id: str,
    claims: CurrentClaims,
    service: TaskServiceDep,
) -> Response:
    """Soft-delete a task. A second delete answers 404."""
    await service.delete_task(claims, _require_task_id(task_id))
    return Response(status_code=204)
