"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from taskapi.application.dtos.auth import TokenClaims
    from taskapi.domain.enums import UserRole


class ITokenService(Protocol):
    """Protocol for bearer token issuance and verification."""

    def issue(self, user_id: str, role: UserRole) -> str:
        """Return a signed token for the identity and role."""

    def verify(self, token: str) -> TokenClaims:
        """Return claims; raise InvalidTokenException if bad or expired."""
