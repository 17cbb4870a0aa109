"""ID generators (CUID2) and the matching format check for path parameters."""

import re

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

# CUID2: starts with a lowercase letter, then lowercase alphanumerics.
_ID_PATTERN = re.compile(r"^[a-z][a-z0-9]{1,31}$")


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def is_valid_id(value: str | None) -> bool:
    """Return True if value has the shape of an id produced by generate_cuid().

    Used to reject malformed ids before they reach the store (document ids
    must not contain '/').
    """
    if not value:
        return False
    return bool(_ID_PATTERN.match(value))
