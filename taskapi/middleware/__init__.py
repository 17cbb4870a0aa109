"""HTTP middleware: timeout, request ID, request logging.

Applied in main app; order matters (last added = outermost).
Import and use from taskapi.main.
"""

from taskapi.middleware.request_id import RequestIDMiddleware
from taskapi.middleware.request_logging import RequestLoggingMiddleware
from taskapi.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestLoggingMiddleware",
    "TimeoutMiddleware",
]
