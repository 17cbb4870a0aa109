"""Task API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskCreateRequest(BaseModel):
    """Request body for creating a task.

    Constraints (title 1-200, description up to 1000, known status) are
    enforced by the domain entity so messages match update validation.
    Empty or null status means open; a null field counts as empty. owner_id
    is always the caller; unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(default="", description="1-200 characters")
    description: str = Field(default="", description="Up to 1000 characters")
    status: str = Field(default="", description="open, in_progress or done")

    @field_validator("title", "description", "status", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class TaskResponse(BaseModel):
    """Task as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    status: str
    owner_id: str
    created_at: datetime
    updated_at: datetime


class TaskEnvelope(BaseModel):
    """{data: task}"""

    data: TaskResponse


class TaskListEnvelope(BaseModel):
    """{data: [task]}"""

    data: list[TaskResponse]
