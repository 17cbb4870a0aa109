"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from taskapi.domain.entities import TaskEntity, UserEntity
from taskapi.domain.enums import TaskStatus, UserRole
from taskapi.domain.exceptions import (
    AuthenticationException,
    ForbiddenException,
    InvalidRequestException,
    InvalidTokenException,
    NotFoundException,
    NoValidUpdatesException,
    StoreException,
    TaskApiException,
    ValidationException,
)

__all__ = [
    # Entities
    "TaskEntity",
    "UserEntity",
    # Enums
    "TaskStatus",
    "UserRole",
    # Exceptions
    "AuthenticationException",
    "ForbiddenException",
    "InvalidRequestException",
    "InvalidTokenException",
    "NotFoundException",
    "NoValidUpdatesException",
    "StoreException",
    "TaskApiException",
    "ValidationException",
]
