"""DTOs for authentication (token claims)."""

from dataclasses import dataclass
from datetime import datetime

from taskapi.domain.enums import UserRole


@dataclass(frozen=True)
class TokenClaims:
    """Decoded identity carried by a bearer token.

    The only carrier of identity across a request; passed explicitly from the
    HTTP layer into every core call.
    """

    user_id: str
    role: UserRole
    issued_at: datetime
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
