"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules (e.g. auth) can use
the same instance without circular imports. The login limit string is read
from settings when a request is checked.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from taskapi.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def login_limit() -> str:
    """Return the configured login rate limit (e.g. '10/minute')."""
    return get_settings().login_rate_limit


limit_login = limiter.limit(login_limit)
