"""Encode/decode Python values to/from Firestore REST API 'fields' format.

Task documents use strings, nulls, timestamps and string arrays; the other
scalar kinds are supported so foreign documents still decode.
"""

import base64
import re
from collections.abc import Callable
from datetime import datetime
from typing import Any

from taskapi.shared.utils.datetime import ensure_utc

# Firestore returns up to nanosecond precision; datetime holds microseconds.
_FRACTION = re.compile(r"\.(\d+)")
_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def _format_timestamp(value: datetime) -> str:
    return ensure_utc(value).strftime(_TIMESTAMP_FORMAT)


def _parse_timestamp(raw: str) -> datetime:
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), raw, count=1)
    return ensure_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))


def _encode_value(value: Any) -> dict:
    """Return the typed Firestore Value for a Python value."""
    if value is None:
        return {"nullValue": None}
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": _format_timestamp(value)}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, bytes):
        return {"bytesValue": base64.standard_b64encode(value).decode("ascii")}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [_encode_value(v) for v in value]}}
    if isinstance(value, dict):
        return {"mapValue": encode_document(value)}
    raise TypeError(f"Unsupported Firestore value type: {type(value)}")


def encode_document(data: dict[str, Any]) -> dict:
    """Convert a Python dict to Firestore REST Document.fields format."""
    return {"fields": {key: _encode_value(value) for key, value in data.items()}}


_DECODERS: dict[str, Callable[[Any], Any]] = {
    "nullValue": lambda _: None,
    "booleanValue": bool,
    "integerValue": int,
    "doubleValue": float,
    "timestampValue": _parse_timestamp,
    "stringValue": str,
    "bytesValue": base64.standard_b64decode,
    "arrayValue": lambda raw: [_decode_value(v) for v in raw.get("values") or []],
    "mapValue": lambda raw: decode_document(raw.get("fields")),
}


def _decode_value(obj: dict) -> Any:
    """Return the Python value for a typed Firestore Value (unknown kinds become None)."""
    for kind, decode in _DECODERS.items():
        if kind in obj:
            return decode(obj[kind])
    return None


def decode_document(fields: dict | None) -> dict:
    """Convert Firestore REST Document.fields to a Python dict."""
    return {key: _decode_value(value) for key, value in (fields or {}).items()}
