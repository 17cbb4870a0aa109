"""Security: JWT token service and password hashing."""

from taskapi.infrastructure.security.jwt import TokenService
from taskapi.infrastructure.security.password import get_password_hash, verify_password

__all__ = [
    "TokenService",
    "get_password_hash",
    "verify_password",
]
