"""DTOs for tasks (no dependency on the store)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DEFAULT_LIST_LIMIT = 10
DEFAULT_LIST_OFFSET = 0
# Firestore encodes limit and offset as Int32.
MAX_PAGINATION_VALUE = 2**31 - 1


@dataclass(frozen=True)
class TaskResult:
    """Task read-model (result of create, get_by_id, update, list)."""

    id: str
    title: str
    description: str
    status: str
    owner_id: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


@dataclass(frozen=True)
class TaskFilter:
    """Query parameters bundle for listing tasks.

    limit and offset keep their defaults unless overridden with a valid value
    (see with_pagination).
    """

    owner_id: str | None = None
    status: str | None = None
    search: str | None = None
    limit: int = DEFAULT_LIST_LIMIT
    offset: int = DEFAULT_LIST_OFFSET

    @classmethod
    def with_pagination(
        cls,
        *,
        owner_id: str | None = None,
        status: str | None = None,
        search: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> TaskFilter:
        """Build a filter; limit applies only if > 0, offset only if >= 0.

        Both are capped at MAX_PAGINATION_VALUE.
        """
        return cls(
            owner_id=owner_id or None,
            status=status or None,
            search=search or None,
            limit=(
                min(limit, MAX_PAGINATION_VALUE)
                if limit is not None and limit > 0
                else DEFAULT_LIST_LIMIT
            ),
            offset=(
                min(offset, MAX_PAGINATION_VALUE)
                if offset is not None and offset >= 0
                else DEFAULT_LIST_OFFSET
            ),
        )
