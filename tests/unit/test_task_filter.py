"""Tests for TaskFilter pagination defaults and overrides."""

import pytest

from taskapi.application.dtos.task import MAX_PAGINATION_VALUE, TaskFilter


def test_defaults() -> None:
    task_filter = TaskFilter.with_pagination()
    assert task_filter == TaskFilter(owner_id=None, status=None, search=None, limit=10, offset=0)


@pytest.mark.parametrize(
    ("limit", "expected"),
    [(None, 10), (0, 10), (-5, 10), (1, 1), (50, 50)],
)
def test_limit_overridden_only_when_positive(limit: int | None, expected: int) -> None:
    assert TaskFilter.with_pagination(limit=limit).limit == expected


@pytest.mark.parametrize(
    ("offset", "expected"),
    [(None, 0), (-1, 0), (0, 0), (30, 30)],
)
def test_offset_overridden_only_when_non_negative(
    offset: int | None, expected: int
) -> None:
    assert TaskFilter.with_pagination(offset=offset).offset == expected


def test_empty_strings_mean_no_filter() -> None:
    task_filter = TaskFilter.with_pagination(owner_id="", status="", search="")
    assert task_filter.owner_id is None
    assert task_filter.status is None
    assert task_filter.search is None


def test_pagination_capped_to_store_range() -> None:
    task_filter = TaskFilter.with_pagination(limit=99_999_999_999, offset=2**40)
    assert task_filter.limit == MAX_PAGINATION_VALUE
    assert task_filter.offset == MAX_PAGINATION_VALUE
