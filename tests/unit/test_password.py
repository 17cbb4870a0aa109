"""Tests for password digest helpers (unsalted SHA-256, constant-time compare)."""

import hashlib

from taskapi.infrastructure.security.password import get_password_hash, verify_password


def test_hash_is_sha256_hex() -> None:
    assert get_password_hash("admin123") == hashlib.sha256(b"admin123").hexdigest()


def test_hash_is_deterministic() -> None:
    """No salt: the same password always yields the same digest."""
    assert get_password_hash("secret") == get_password_hash("secret")


def test_verify_password_matches() -> None:
    digest = get_password_hash("correct horse")
    assert verify_password("correct horse", digest) is True


def test_verify_password_rejects_wrong_password() -> None:
    digest = get_password_hash("correct horse")
    assert verify_password("battery staple", digest) is False
