"""Shared utilities: telemetry (logging) and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from taskapi.shared.utils import (
    ensure_utc,
    from_timestamp_utc,
    generate_cuid,
    is_valid_id,
    utc_now,
)

__all__ = [
    "generate_cuid",
    "is_valid_id",
    "utc_now",
    "ensure_utc",
    "from_timestamp_utc",
]
