"""API v1: routes and their dependencies."""

from taskapi.api.v1.router import api_router

__all__ = ["api_router"]
