"""DTOs for user use cases."""

from dataclasses import dataclass
from datetime import datetime

from taskapi.domain.enums import UserRole


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of authenticate). No password."""

    id: str
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime
