"""Shared utilities: datetime and id generators."""

from taskapi.shared.utils.datetime import (
    ensure_utc,
    from_timestamp_utc,
    utc_now,
)
from taskapi.shared.utils.generators import generate_cuid, is_valid_id

__all__ = [
    "generate_cuid",
    "is_valid_id",
    "utc_now",
    "ensure_utc",
    "from_timestamp_utc",
]
