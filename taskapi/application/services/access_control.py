"""Access control: ownership checks and list scoping over token claims.

Pure decisions over (caller claims, target task); owns no data and does no I/O.
"""

from __future__ import annotations

from dataclasses import replace

from taskapi.application.dtos.auth import TokenClaims
from taskapi.application.dtos.task import TaskFilter, TaskResult
from taskapi.domain.exceptions import ForbiddenException


class AccessControl:
    """Owner-or-admin policy for task mutation and list visibility.

    Reading a single task by id is open to any authenticated caller; only
    listing is scoped.
    """

    def can_mutate(self, claims: TokenClaims, task: TaskResult) -> bool:
        """Return True if the caller owns the task or is an admin."""
        return claims.user_id == task.owner_id or claims.is_admin

    def require_mutate(
        self, claims: TokenClaims, task: TaskResult, action: str
    ) -> None:
        """Raise ForbiddenException if the caller may not perform action on task."""
        if not self.can_mutate(claims, task):
            raise ForbiddenException(resource="task", action=action)

    def scope_filter(self, claims: TokenClaims, task_filter: TaskFilter) -> TaskFilter:
        """Force non-admin callers onto their own tasks; admins keep their owner filter."""
        if claims.is_admin:
            return task_filter
        return replace(task_filter, owner_id=claims.user_id)
