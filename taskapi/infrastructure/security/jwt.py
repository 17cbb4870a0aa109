"""JWT token issuance and verification for authentication.

TokenService is built once at startup from settings (secret, algorithm,
expiry) and is immutable afterwards; tests inject their own secret and clock.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, cast

from jose import JWTError, jwt

from taskapi.application.dtos.auth import TokenClaims
from taskapi.domain.enums import UserRole
from taskapi.domain.exceptions import InvalidTokenException
from taskapi.shared.utils.datetime import from_timestamp_utc, utc_now

if TYPE_CHECKING:
    from taskapi.core.config import Settings


class TokenService:
    """Issue and verify signed bearer tokens carrying identity and role.

    Claims: sub (identity id), role, iat, exp. No server-side state.
    """

    def __init__(
        self,
        secret: str,
        expiry_hours: int,
        *,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._expiry = timedelta(hours=expiry_hours)
        self._algorithm = algorithm
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenService:
        """Build from application settings (called once at app creation)."""
        return cls(
            settings.jwt_secret.get_secret_value(),
            settings.jwt_expiry_hours,
            algorithm=settings.jwt_algorithm,
        )

    def issue(self, user_id: str, role: UserRole) -> str:
        """Create a signed token for user_id and role.

        Args:
            user_id: Identity id (becomes the sub claim).
            role: Caller role.

        Returns:
            Encoded JWT string.
        """
        now = self._clock()
        issued_at = int(now.timestamp())
        to_encode: dict[str, Any] = {
            "sub": user_id,
            "role": UserRole(role).value,
            "iat": issued_at,
            "exp": issued_at + int(self._expiry.total_seconds()),
        }
        encoded = jwt.encode(to_encode, self._secret, algorithm=self._algorithm)
        return cast(str, encoded)

    def verify(self, token: str) -> TokenClaims:
        """Verify and decode a token. Returns the embedded claims.

        Enforces signature, presence of sub/role/iat/exp, a known role, and
        that the current time is strictly before exp.

        Args:
            token: JWT string (from the Authorization header).

        Returns:
            Decoded TokenClaims.

        Raises:
            InvalidTokenException: If token is invalid, expired, or missing claims.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                # jose turns require_<claim> into verify_<claim> against the
                # wall clock; presence and expiry are checked below instead.
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise InvalidTokenException(f"{e!s}") from e

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise InvalidTokenException("Missing sub claim")
        try:
            role = UserRole(payload.get("role"))
            issued_at = from_timestamp_utc(payload["iat"])
            expires_at = from_timestamp_utc(payload["exp"])
        except (ValueError, TypeError, KeyError) as e:
            raise InvalidTokenException(f"Invalid claims: {e!s}") from e

        if self._clock() >= expires_at:
            raise InvalidTokenException("Token has expired")
        return TokenClaims(
            user_id=subject,
            role=role,
            issued_at=issued_at,
            expires_at=expires_at,
        )
