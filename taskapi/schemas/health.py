"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /healthz when the store is reachable."""

    status: str = Field(default="ok", description="Service status")
