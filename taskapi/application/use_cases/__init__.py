"""Application use cases (task operations)."""

from taskapi.application.use_cases.tasks import TaskService

__all__ = [
    "TaskService",
]
