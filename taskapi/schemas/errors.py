"""Error body shared by every non-2xx response."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """{error, message}: machine-readable code plus human-readable text."""

    error: str = Field(..., description="Error code, e.g. not_found")
    message: str = Field(..., description="Human-readable description")


ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"model": ErrorResponse, "description": "Malformed request or validation error"},
    401: {"model": ErrorResponse, "description": "Missing or invalid credentials"},
    403: {"model": ErrorResponse, "description": "Caller may not modify this task"},
    404: {"model": ErrorResponse, "description": "Task not found"},
    500: {"model": ErrorResponse, "description": "Store failure"},
}
