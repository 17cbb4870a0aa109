"""Auth API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from taskapi.domain.enums import UserRole


class LoginRequest(BaseModel):
    """Request body for POST /v1/login."""

    email: EmailStr = Field(..., description="Login identifier")
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")


class UserResponse(BaseModel):
    """Public view of an identity (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime


class LoginResponse(BaseModel):
    """Signed bearer token plus the identity it was issued for."""

    token: str
    user: UserResponse
