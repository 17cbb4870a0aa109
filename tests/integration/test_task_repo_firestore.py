"""FirestoreTaskRepository against the in-memory Firestore fake.

Exercises the real REST client, encoding and query building; only the HTTP
transport is replaced.
"""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from taskapi.application.dtos.task import TaskFilter
from taskapi.domain.entities.task import TaskEntity
from taskapi.domain.exceptions import (
    NotFoundException,
    NoValidUpdatesException,
    StoreException,
    ValidationException,
)
from taskapi.infrastructure.firebase.collections import COLLECTION_TASKS
from taskapi.infrastructure.firebase.repositories import FirestoreTaskRepository
from taskapi.infrastructure.firebase.repositories.task_repo_firestore import search_terms
from tests.fakes import FakeFirestore

T0 = datetime(2026, 2, 1, 9, 0, 0, tzinfo=UTC)


class TickingClock:
    """Advances one second per call so creation order is unambiguous."""

    def __init__(self) -> None:
        self.now = T0

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def repo(store_client) -> FirestoreTaskRepository:
    return FirestoreTaskRepository(store_client, timeout_seconds=1.0, clock=TickingClock())


async def _create(repo, title="Task", owner="u1", **kwargs):
    return await repo.create(TaskEntity(title=title, owner_id=owner, **kwargs))


async def test_create_assigns_unique_ids_and_equal_timestamps(repo) -> None:
    first = await _create(repo, "First")
    second = await _create(repo, "Second")
    assert first.id != second.id
    assert first.created_at == first.updated_at
    assert first.deleted_at is None
    assert first.status == "open"


async def test_get_by_id_round_trips(repo) -> None:
    created = await _create(repo, "Buy milk", description="two litres", status="in_progress")
    found = await repo.get_by_id(created.id)
    assert found == created


async def test_get_unknown_id_not_found(repo) -> None:
    with pytest.raises(NotFoundException):
        await repo.get_by_id("doesnotexist1")


async def test_update_stamps_updated_at_and_keeps_owner(repo) -> None:
    created = await _create(repo, "Old")
    updated = await repo.update(created.id, {"title": "New", "owner_id": "u2"})
    assert updated.title == "New"
    assert updated.owner_id == "u1"
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at


async def test_update_refreshes_search_terms(repo, fake_store: FakeFirestore) -> None:
    created = await _create(repo, "Buy milk")
    await repo.update(created.id, {"title": "Walk dog"})
    raw = fake_store.raw_fields(COLLECTION_TASKS, created.id)
    terms = [v["stringValue"] for v in raw["search_terms"]["arrayValue"]["values"]]
    assert terms == ["walk", "dog"]


async def test_update_with_no_allowed_fields_writes_nothing(
    repo, fake_store: FakeFirestore
) -> None:
    created = await _create(repo)
    writes_before = len(fake_store.writes)
    with pytest.raises(NoValidUpdatesException):
        await repo.update(created.id, {"owner_id": "u2", "deleted_at": None})
    assert len(fake_store.writes) == writes_before


async def test_update_validates_values(repo) -> None:
    created = await _create(repo)
    with pytest.raises(ValidationException):
        await repo.update(created.id, {"status": "archived"})


async def test_soft_delete_hides_but_retains(repo, fake_store: FakeFirestore) -> None:
    created = await _create(repo)
    await repo.delete(created.id)

    with pytest.raises(NotFoundException):
        await repo.get_by_id(created.id)
    with pytest.raises(NotFoundException):
        await repo.update(created.id, {"title": "Zombie"})
    with pytest.raises(NotFoundException):
        await repo.delete(created.id)
    assert await repo.list(TaskFilter()) == []

    raw = fake_store.raw_fields(COLLECTION_TASKS, created.id)
    assert raw is not None
    assert "timestampValue" in raw["deleted_at"]
    assert raw["title"] == {"stringValue": "Task"}


async def test_concurrent_deletes_only_one_succeeds(
    repo, fake_store: FakeFirestore
) -> None:
    created = await _create(repo)
    fake_store.delay_seconds = 0.01
    results = await asyncio.gather(
        repo.delete(created.id), repo.delete(created.id), return_exceptions=True
    )
    assert results.count(None) == 1
    assert sum(isinstance(r, NotFoundException) for r in results) == 1


async def test_update_racing_delete_never_touches_deleted_task(
    repo, fake_store: FakeFirestore
) -> None:
    created = await _create(repo, "Original")
    fake_store.delay_seconds = 0.01
    deleted, updated = await asyncio.gather(
        repo.delete(created.id),
        repo.update(created.id, {"title": "Hijacked"}),
        return_exceptions=True,
    )
    assert deleted is None
    raw = fake_store.raw_fields(COLLECTION_TASKS, created.id)
    assert "timestampValue" in raw["deleted_at"]
    if isinstance(updated, NotFoundException):
        assert raw["title"] == {"stringValue": "Original"}
    else:
        # the update was ordered before the delete
        assert updated.title == "Hijacked"


async def test_concurrent_updates_last_write_wins(
    repo, fake_store: FakeFirestore
) -> None:
    created = await _create(repo, "Start")
    fake_store.delay_seconds = 0.01
    first, second = await asyncio.gather(
        repo.update(created.id, {"title": "Alpha"}),
        repo.update(created.id, {"title": "Beta"}),
    )
    assert {first.title, second.title} == {"Alpha", "Beta"}
    stored = await repo.get_by_id(created.id)
    assert stored.title in ("Alpha", "Beta")
    raw = fake_store.raw_fields(COLLECTION_TASKS, created.id)
    terms = [v["stringValue"] for v in raw["search_terms"]["arrayValue"]["values"]]
    assert terms == [stored.title.lower()]


async def test_list_newest_first_with_pagination(repo) -> None:
    titles = ["one", "two", "three", "four"]
    for title in titles:
        await _create(repo, title)

    page = await repo.list(TaskFilter(limit=2, offset=0))
    assert [t.title for t in page] == ["four", "three"]
    page = await repo.list(TaskFilter(limit=2, offset=2))
    assert [t.title for t in page] == ["two", "one"]
    assert await repo.list(TaskFilter(limit=2, offset=4)) == []


async def test_list_filters_by_owner_and_status(repo) -> None:
    await _create(repo, "a", owner="u1", status="done")
    await _create(repo, "b", owner="u1", status="open")
    await _create(repo, "c", owner="u2", status="done")

    mine = await repo.list(TaskFilter(owner_id="u1"))
    assert {t.title for t in mine} == {"a", "b"}
    done = await repo.list(TaskFilter(status="done"))
    assert {t.title for t in done} == {"a", "c"}
    mine_done = await repo.list(TaskFilter(owner_id="u1", status="done"))
    assert [t.title for t in mine_done] == ["a"]


async def test_list_search_matches_title_or_description(repo) -> None:
    await _create(repo, "Buy milk")
    await _create(repo, "Chores", description="walk the DOG")
    await _create(repo, "Read book")

    assert [t.title for t in await repo.list(TaskFilter(search="milk"))] == ["Buy milk"]
    assert [t.title for t in await repo.list(TaskFilter(search="dog"))] == ["Chores"]
    found = await repo.list(TaskFilter(search="milk book"))
    assert [t.title for t in found] == ["Read book", "Buy milk"]


async def test_list_search_without_words_matches_nothing(
    repo, fake_store: FakeFirestore
) -> None:
    await _create(repo, "Buy milk")
    requests_before = len(fake_store.requests)
    assert await repo.list(TaskFilter(search="!!!")) == []
    assert len(fake_store.requests) == requests_before


async def test_store_failure_becomes_store_exception(
    repo, fake_store: FakeFirestore
) -> None:
    fake_store.fail_status = 500
    with pytest.raises(StoreException) as exc_info:
        await repo.list(TaskFilter())
    assert exc_info.value.error_code == "database_error"
    assert exc_info.value.message == "Failed to list tasks"


async def test_store_timeout_becomes_store_exception(store_client, fake_store) -> None:
    repo = FirestoreTaskRepository(store_client, timeout_seconds=0.05)
    fake_store.delay_seconds = 1.0
    with pytest.raises(StoreException) as exc_info:
        await repo.create(TaskEntity(title="Slow", owner_id="u1"))
    assert exc_info.value.message == "Failed to create task"


async def test_ping(repo, fake_store: FakeFirestore) -> None:
    assert await repo.ping() is True
    fake_store.fail_status = 503
    assert await repo.ping() is False


def test_search_terms_tokenizes_and_dedupes() -> None:
    assert search_terms("Buy MILK, buy eggs", None, "milk-shake") == [
        "buy",
        "milk",
        "eggs",
        "shake",
    ]
