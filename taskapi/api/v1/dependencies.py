"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the services built in create_app() and kept
on app.state (token service, user directory, store client). Routes depend
only on these dependencies, not on infrastructure directly.

Caller identity is an explicit dependency value (get_current_claims); there
is no request-global user context.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from taskapi.application.dtos.auth import TokenClaims
from taskapi.application.interfaces import ITaskRepository, ITokenService
from taskapi.application.services.access_control import AccessControl
from taskapi.application.use_cases.tasks import TaskService
from taskapi.core.config import get_settings
from taskapi.domain.exceptions import AuthenticationException
from taskapi.infrastructure.firebase import FirestoreRESTClient
from taskapi.infrastructure.firebase.repositories import FirestoreTaskRepository
from taskapi.infrastructure.users import InMemoryUserRepository

_BEARER_PREFIX = "bearer "


def get_token_service(request: Request) -> ITokenService:
    """TokenService built once at app creation."""
    return request.app.state.token_service


def get_user_repo(request: Request) -> InMemoryUserRepository:
    """User directory holding the synthetic admin."""
    return request.app.state.user_repo


def get_store_client(request: Request) -> FirestoreRESTClient:
    """Shared Firestore REST client (one HTTP pool per process)."""
    return request.app.state.store_client


def get_current_claims(
    request: Request,
    token_service: Annotated[ITokenService, Depends(get_token_service)],
) -> TokenClaims:
    """Resolve the caller from 'Authorization: Bearer <token>'.

    Raises:
        AuthenticationException: missing_authorization when the header is
            absent, invalid_authorization when it is not a Bearer value.
        InvalidTokenException: when the token fails verification.
    """
    header = request.headers.get("Authorization")
    if not header:
        raise AuthenticationException(
            "Authorization header required", "missing_authorization"
        )
    if not header.lower().startswith(_BEARER_PREFIX) or not header[
        len(_BEARER_PREFIX) :
    ].strip():
        raise AuthenticationException(
            "Invalid authorization header format", "invalid_authorization"
        )
    return token_service.verify(header[len(_BEARER_PREFIX) :].strip())


def get_task_repo(
    client: Annotated[FirestoreRESTClient, Depends(get_store_client)],
) -> ITaskRepository:
    """Firestore task repository bounded by the configured store timeout."""
    return FirestoreTaskRepository(
        client, timeout_seconds=get_settings().store_timeout_seconds
    )


def get_task_service(
    task_repo: Annotated[ITaskRepository, Depends(get_task_repo)],
) -> TaskService:
    """TaskService with the owner-or-admin access policy."""
    return TaskService(task_repo, AccessControl())


CurrentClaims = Annotated[TokenClaims, Depends(get_current_claims)]
