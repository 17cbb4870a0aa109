"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (task store, token service).
"""

from taskapi.application.interfaces import ITaskRepository, ITokenService
from taskapi.application.services.access_control import AccessControl
from taskapi.application.use_cases.tasks import TaskService

__all__ = [
    "AccessControl",
    "ITaskRepository",
    "ITokenService",
    "TaskService",
]
