"""Application services (access control)."""

from taskapi.application.services.access_control import AccessControl

__all__ = [
    "AccessControl",
]
