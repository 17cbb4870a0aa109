"""Domain entities.

Pure domain models; no persistence concerns.
"""

from taskapi.domain.entities.task import (
    MUTABLE_TASK_FIELDS,
    TaskEntity,
    filter_task_updates,
)
from taskapi.domain.entities.user import UserEntity

__all__ = [
    "MUTABLE_TASK_FIELDS",
    "TaskEntity",
    "UserEntity",
    "filter_task_updates",
]
