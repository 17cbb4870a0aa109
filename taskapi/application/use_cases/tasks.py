"""Task operations: create, get, update, delete, list.

Every call takes the caller's TokenClaims explicitly; there is no ambient
request context. Ownership is checked against the stored task before any
mutation reaches the repository.
"""

from __future__ import annotations

import logging
from typing import Any

from taskapi.application.dtos.auth import TokenClaims
from taskapi.application.dtos.task import TaskFilter, TaskResult
from taskapi.application.interfaces.repositories import ITaskRepository
from taskapi.application.services.access_control import AccessControl
from taskapi.domain.entities.task import TaskEntity, filter_task_updates

logger = logging.getLogger(__name__)


class TaskService:
    """Owner-scoped task operations (delegate persistence to ITaskRepository)."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        access_control: AccessControl | None = None,
    ) -> None:
        self.task_repo = task_repo
        self.access_control = access_control or AccessControl()

    async def create_task(
        self,
        claims: TokenClaims,
        title: str,
        description: str = "",
        status: str = "",
    ) -> TaskResult:
        """Create a task owned by the caller. Empty status becomes open."""
        entity = TaskEntity(
            title=title,
            owner_id=claims.user_id,
            description=description,
            status=status,
        )
        created = await self.task_repo.create(entity)
        logger.info("Task %s created by %s", created.id, claims.user_id)
        return created

    async def get_task(self, claims: TokenClaims, task_id: str) -> TaskResult:
        """Return a live task by id. Any authenticated caller may read it."""
        return await self.task_repo.get_by_id(task_id)

    async def update_task(
        self,
        claims: TokenClaims,
        task_id: str,
        updates: dict[str, Any],
    ) -> TaskResult:
        """Apply title/description/status updates if the caller owns the task or is admin.

        Order: NotFound, then Forbidden, then NoValidUpdates/Validation.
        """
        task = await self.task_repo.get_by_id(task_id)
        self.access_control.require_mutate(claims, task, "update")
        allowed = filter_task_updates(updates)
        updated = await self.task_repo.update(task_id, allowed)
        logger.info(
            "Task %s updated by %s (fields: %s)",
            task_id,
            claims.user_id,
            ",".join(sorted(allowed)),
        )
        return updated

    async def delete_task(self, claims: TokenClaims, task_id: str) -> None:
        """Soft-delete a task if the caller owns it or is admin."""
        task = await self.task_repo.get_by_id(task_id)
        self.access_control.require_mutate(claims, task, "delete")
        await self.task_repo.delete(task_id)
        logger.info("Task %s deleted by %s", task_id, claims.user_id)

    async def list_tasks(
        self, claims: TokenClaims, task_filter: TaskFilter
    ) -> list[TaskResult]:
        """List live tasks; non-admins only ever see their own."""
        scoped = self.access_control.scope_filter(claims, task_filter)
        return await self.task_repo.list(scoped)
