"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from taskapi.infrastructure or taskapi.api.
"""

from taskapi.application.interfaces.repositories import ITaskRepository
from taskapi.application.interfaces.services import ITokenService

__all__ = [
    "ITaskRepository",
    "ITokenService",
]
