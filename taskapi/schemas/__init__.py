"""Pydantic request/response schemas for the API."""

from taskapi.schemas.auth import LoginRequest, LoginResponse, UserResponse
from taskapi.schemas.errors import ERROR_RESPONSES, ErrorResponse
from taskapi.schemas.health import HealthResponse
from taskapi.schemas.task import (
    TaskCreateRequest,
    TaskEnvelope,
    TaskListEnvelope,
    TaskResponse,
)

__all__ = [
    "ERROR_RESPONSES",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "TaskCreateRequest",
    "TaskEnvelope",
    "TaskListEnvelope",
    "TaskResponse",
    "UserResponse",
]
