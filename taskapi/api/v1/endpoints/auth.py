"""Auth API: login.

Exchanges email and password for a signed bearer token. Rate limited per
client address (slowapi).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from taskapi.api.v1.dependencies import get_token_service, get_user_repo
from taskapi.core.limiter import limit_login
from taskapi.domain.exceptions import AuthenticationException
from taskapi.application.interfaces import ITokenService
from taskapi.infrastructure.users import InMemoryUserRepository
from taskapi.schemas.auth import LoginRequest, LoginResponse, UserResponse
from taskapi.schemas.errors import ErrorResponse

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed or invalid body"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
@limit_login
async def login(
    request: Request,
    body: LoginRequest,
    user_repo: Annotated[InMemoryUserRepository, Depends(get_user_repo)],
    token_service: Annotated[ITokenService, Depends(get_token_service)],
):
    """Authenticate with email and password; return token and user."""
    user = user_repo.authenticate(body.email, body.password)
    if user is None:
        raise AuthenticationException("Invalid email or password", "invalid_credentials")
    token = token_service.issue(user.id, user.role)
    return LoginResponse(token=token, user=UserResponse.model_validate(user))
