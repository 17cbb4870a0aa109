"""Domain enumerations for the task API.

Enums represent fixed sets of domain values (task status, user role).
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Task status. Any status may move to any other; there is no transition order."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [status.value for status in cls]


class UserRole(str, Enum):
    """Caller role carried in token claims. Admins bypass ownership checks."""

    USER = "user"
    ADMIN = "admin"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid role values as strings."""
        return [role.value for role in cls]
