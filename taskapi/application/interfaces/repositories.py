"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from taskapi.application.dtos.task import TaskFilter, TaskResult
    from taskapi.domain.entities.task import TaskEntity


class ITaskRepository(Protocol):
    """Protocol for the task store.

    Every read and write excludes soft-deleted tasks; a soft-deleted id
    behaves exactly like an id that never existed.
    """

    async def create(self, task: TaskEntity) -> TaskResult:
        """Persist a validated task with a fresh id and created_at == updated_at."""

    async def get_by_id(self, task_id: str) -> TaskResult:
        """Return the task; raise NotFoundException if absent or soft-deleted."""

    async def update(self, task_id: str, updates: dict[str, Any]) -> TaskResult:
        """Apply mutable fields, stamp updated_at, return the updated task.

        Raises NoValidUpdatesException when nothing mutable remains and
        NotFoundException when the task is absent or soft-deleted.
        """

    async def delete(self, task_id: str) -> None:
        """Soft-delete (set deleted_at); raise NotFoundException if absent or already deleted."""

    async def list(self, task_filter: TaskFilter) -> list[TaskResult]:
        """Return live tasks matching the filter, newest first, paginated."""

    async def ping(self) -> bool:
        """Return True if the store answers."""
