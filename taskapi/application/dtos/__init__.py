"""Application DTOs (no store dependency)."""

from taskapi.application.dtos.auth import TokenClaims
from taskapi.application.dtos.task import TaskFilter, TaskResult
from taskapi.application.dtos.user import UserResult

__all__ = [
    "TaskFilter",
    "TaskResult",
    "TokenClaims",
    "UserResult",
]
