"""In-process user repository.

Holds the identities that can log in. At startup a single synthetic admin is
minted from settings; the repository itself supports any number of users.
"""

from __future__ import annotations

from collections.abc import Iterable

from taskapi.application.dtos.user import UserResult
from taskapi.domain.entities.user import UserEntity
from taskapi.domain.enums import UserRole
from taskapi.infrastructure.security.password import get_password_hash, verify_password
from taskapi.shared.utils.datetime import utc_now
from taskapi.shared.utils.generators import generate_cuid

# Compared against when the email is unknown so both paths hash once.
_DUMMY_HASH = get_password_hash("not-a-real-password")


class InMemoryUserRepository:
    """User repository keyed by email (emails are unique, compared case-insensitively)."""

    def __init__(self, users: Iterable[UserEntity] = ()) -> None:
        self._by_email: dict[str, UserEntity] = {}
        for user in users:
            self.add(user)

    @classmethod
    def with_admin(cls, email: str, password: str) -> InMemoryUserRepository:
        """Return a repository holding one freshly minted admin identity."""
        repo = cls()
        repo.create_user(email=email, password=password, role=UserRole.ADMIN)
        return repo

    def _to_result(self, user: UserEntity) -> UserResult:
        return UserResult(
            id=user.id,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def add(self, user: UserEntity) -> None:
        """Register an existing identity; raise ValueError on duplicate email."""
        key = user.email.strip().lower()
        if key in self._by_email:
            raise ValueError(f"User with email {user.email!r} already exists")
        self._by_email[key] = user

    def create_user(
        self,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
    ) -> UserResult:
        """Create user with hashed password; return created user."""
        now = utc_now()
        user = UserEntity(
            id=generate_cuid(),
            email=email,
            password_hash=get_password_hash(password),
            role=role,
            created_at=now,
            updated_at=now,
        )
        self.add(user)
        return self._to_result(user)

    def get_by_email(self, email: str) -> UserResult | None:
        """Return user by email."""
        user = self._by_email.get(email.strip().lower())
        return self._to_result(user) if user else None

    def authenticate(self, email: str, password: str) -> UserResult | None:
        """Verify email/password; return user or None."""
        user = self._by_email.get(email.strip().lower())
        if user is None:
            verify_password(password, _DUMMY_HASH)
            return None
        if not verify_password(password, user.password_hash):
            return None
        return self._to_result(user)
