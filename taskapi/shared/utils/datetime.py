"""UTC datetime helpers.

Every timestamp the service stores or signs is timezone-aware UTC with
microsecond precision (what the document store round-trips).
"""

from datetime import UTC, datetime
from typing import overload


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


@overload
def ensure_utc(dt: datetime) -> datetime: ...


@overload
def ensure_utc(dt: None) -> None: ...


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize dt to aware UTC; naive values are taken to be UTC already.

    Used at the store boundary on both encode and decode.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def from_timestamp_utc(timestamp: float) -> datetime:
    """Aware UTC datetime for a Unix timestamp in seconds (JWT iat/exp)."""
    return datetime.fromtimestamp(timestamp, tz=UTC)
