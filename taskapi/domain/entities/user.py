"""User domain entity."""

from dataclasses import dataclass
from datetime import datetime

from taskapi.domain.enums import UserRole


@dataclass(frozen=True)
class UserEntity:
    """Identity that can log in. The password is held only as a digest."""

    id: str
    email: str
    password_hash: str
    role: UserRole
    created_at: datetime
    updated_at: datetime

    @property
    def is_admin(self) -> bool:
        """Return whether this identity bypasses ownership checks."""
        return self.role == UserRole.ADMIN
