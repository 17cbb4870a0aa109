"""Whole-request time bound.

A request still running after request_timeout_seconds is cancelled and the
client gets 504 {"error": "timeout", "message": ...}, unless the handler had
already begun its response, in which case the connection is simply ended.
"""

import asyncio
import json
import logging
from typing import Callable

logger = logging.getLogger(__name__)


async def _send_timeout(send: Callable, timeout_seconds: float) -> None:
    payload = json.dumps(
        {"error": "timeout", "message": f"Request exceeded {timeout_seconds}s"}
    ).encode()
    await send(
        {
            "type": "http.response.start",
            "status": 504,
            "headers": [
                (b"content-type", b"application/json"),
                (b"content-length", str(len(payload)).encode()),
            ],
        }
    )
    await send({"type": "http.response.body", "body": payload})


def TimeoutMiddleware(app: Callable, timeout_seconds: float) -> Callable:
    """Raw ASGI wrapper bounding each HTTP request to timeout_seconds."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        started = asyncio.Event()

        async def tracking_send(message: dict) -> None:
            if message["type"] == "http.response.start":
                started.set()
            await send(message)

        try:
            await asyncio.wait_for(app(scope, receive, tracking_send), timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(
                "Request timed out after %ss: %s %s",
                timeout_seconds,
                scope.get("method", ""),
                scope.get("path", ""),
            )
            if not started.is_set():
                await _send_timeout(send, timeout_seconds)

    return asgi_app
