"""Entry point: python -m taskapi runs the API under uvicorn."""

import uvicorn

from taskapi.core.config import get_settings
from taskapi.shared.telemetry.logging import setup_logging


def main() -> None:
    """Serve taskapi.main:app on the configured host and port.

    uvicorn handles SIGINT/SIGTERM: in-flight requests finish, then the
    lifespan shutdown closes the store client.
    """
    settings = get_settings()
    setup_logging()
    uvicorn.run(
        "taskapi.main:app",
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else settings.log_level.lower(),
        timeout_graceful_shutdown=30,
    )


if __name__ == "__main__":
    main()
