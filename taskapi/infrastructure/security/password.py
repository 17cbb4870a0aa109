"""Password hashing (unsalted single-round SHA-256, hex encoded).

Digests are reproducible across processes and match previously stored
hashes. There is no per-password salt and no work factor.
"""

import hashlib
import hmac


def get_password_hash(password: str) -> str:
    """Return the hex SHA-256 digest of password."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password hashes to hashed_password (constant-time compare)."""
    if not isinstance(hashed_password, str):
        return False
    return hmac.compare_digest(get_password_hash(plain_password), hashed_password)
