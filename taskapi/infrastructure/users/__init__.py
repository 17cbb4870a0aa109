"""User lookup for login (in-process; no user management)."""

from taskapi.infrastructure.users.user_repo_memory import InMemoryUserRepository

__all__ = [
    "InMemoryUserRepository",
]
