"""Access logging middleware: one line per HTTP request.

Logs method, path, response status, duration and the request ID set by
RequestIDMiddleware (which must wrap this middleware). Raw ASGI.
"""

import logging
import time
from typing import Callable

logger = logging.getLogger("taskapi.access")


def RequestLoggingMiddleware(app: Callable) -> Callable:
    """Log each HTTP request after the response is sent (or the app raised)."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        started = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: dict) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await app(scope, receive, send_wrapper)
        finally:
            logger.info(
                "%s %s %s %.1fms request_id=%s",
                scope.get("method", ""),
                scope.get("path", ""),
                status_code,
                (time.perf_counter() - started) * 1000,
                scope.get("state", {}).get("request_id", "-"),
            )

    return asgi_app
