"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses. Every error body is exactly {error, message}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskapi.core.config import get_settings
from taskapi.domain.exceptions import StoreException, TaskApiException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "invalid_request": 400,
    "invalid_id": 400,
    "validation_error": 400,
    "no_updates": 400,
    "unauthorized": 401,
    "missing_authorization": 401,
    "invalid_authorization": 401,
    "invalid_token": 401,
    "invalid_credentials": 401,
    "forbidden": 403,
    "not_found": 404,
    "database_error": 500,
}

# Error types pydantic reports when the body as a whole is not usable JSON.
_MALFORMED_BODY_TYPES = frozenset(
    {"json_invalid", "missing", "dict_type", "model_attributes_type"}
)

_HTTP_ERROR_CODES: dict[int, str] = {
    404: "not_found",
    405: "method_not_allowed",
}


def _error_response(status_code: int, error: str, message: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message},
    )


def _task_api_exception_handler(
    request: Request, exc: TaskApiException
) -> JSONResponse:
    """Return JSON from TaskApiException.to_dict() with appropriate status code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if isinstance(exc, StoreException):
        logger.error(
            "Store error on %s %s: %s",
            request.method,
            request.url.path,
            exc.details,
        )
    else:
        logger.debug(
            "%s on %s %s: %s %s",
            exc.error_code,
            request.method,
            request.url.path,
            exc.message,
            exc.details,
        )
    return JSONResponse(status_code=status, content=exc.to_dict())


def _field_message(error: dict[str, Any]) -> str:
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
    msg = error.get("msg", "is invalid")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400: invalid_request for an unusable body, else validation_error."""
    errors = exc.errors()
    for error in errors:
        if error.get("type") == "json_invalid" or (
            error.get("type") in _MALFORMED_BODY_TYPES
            and tuple(error.get("loc", ())) == ("body",)
        ):
            return _error_response(400, "invalid_request", "Invalid JSON")
    return _error_response(
        400,
        "validation_error",
        ", ".join(_field_message(error) for error in errors),
    )


def _rate_limit_exception_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Return 429 when a slowapi limit is exceeded."""
    logger.warning(
        "Rate limit exceeded on %s %s: %s", request.method, request.url.path, exc.detail
    )
    return _error_response(
        429, "rate_limited", f"Rate limit exceeded: {exc.detail}"
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": _HTTP_ERROR_CODES.get(exc.status_code, "http_error"),
            "message": exc.detail,
        },
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return _error_response(500, "internal_error", detail)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: TaskApiException (and
    subclasses), RequestValidationError, RateLimitExceeded,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(TaskApiException, _task_api_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
