"""taskapi: task-management REST API with token auth and owner-scoped access."""

__version__ = "1.0.0"
