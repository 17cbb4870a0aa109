"""Firestore-backed task repository (implements ITaskRepository).

Soft-deleted tasks keep their document with deleted_at set; every read and
write here filters them out, so they behave as if they did not exist. Each
store round-trip is bounded by timeout_seconds and any store failure surfaces
as StoreException. Nothing is retried.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, TypeVar

import httpx

from taskapi.application.dtos.task import TaskFilter, TaskResult
from taskapi.domain.entities.task import TaskEntity, filter_task_updates
from taskapi.domain.exceptions import NotFoundException, StoreException
from taskapi.infrastructure.firebase._rest_client import (
    DocumentExistsError,
    DocumentSnapshot,
    FirestoreRESTClient,
    PreconditionFailedError,
)
from taskapi.infrastructure.firebase.collections import COLLECTION_TASKS
from taskapi.shared.utils.datetime import utc_now
from taskapi.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Firestore caps array-contains-any at 30 values.
MAX_SEARCH_TERMS = 30

# Guarded writes re-read and retry this many times under contention.
MAX_WRITE_ATTEMPTS = 5

_WORD = re.compile(r"\w+")


def search_terms(*texts: str | None) -> list[str]:
    """Return unique lower-cased word tokens of texts, in first-seen order."""
    seen: dict[str, None] = {}
    for text in texts:
        for word in _WORD.findall((text or "").lower()):
            seen.setdefault(word, None)
    return list(seen)


def _is_live(data: dict[str, Any]) -> bool:
    return data.get("deleted_at") is None


def _to_result(task_id: str, data: dict[str, Any]) -> TaskResult:
    """Map a task document to TaskResult."""
    return TaskResult(
        id=task_id,
        title=data.get("title", ""),
        description=data.get("description") or "",
        status=data.get("status", ""),
        owner_id=data.get("owner_id", ""),
        created_at=data["created_at"],
        updated_at=data["updated_at"],
        deleted_at=data.get("deleted_at"),
    )


class FirestoreTaskRepository:
    """Task repository using Firestore. Implements ITaskRepository."""

    def __init__(
        self,
        client: FirestoreRESTClient,
        *,
        timeout_seconds: float = 5.0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_TASKS)
        self._timeout = timeout_seconds
        self._clock = clock

    async def _run(self, operation: str, call: Awaitable[T]) -> T:
        """Await a store call under the timeout; map store failures to StoreException."""
        try:
            return await asyncio.wait_for(call, timeout=self._timeout)
        except TimeoutError as e:
            logger.error(
                "Task store %s timed out after %s seconds", operation, self._timeout
            )
            raise StoreException(operation) from e
        except (httpx.HTTPError, DocumentExistsError, ValueError) as e:
            logger.error("Task store %s failed: %s", operation, e)
            raise StoreException(operation) from e

    async def _get_live(self, task_id: str, operation: str) -> DocumentSnapshot:
        doc = await self._run(operation, self._coll.document(task_id).get())
        if doc is None or not _is_live(doc.to_dict()):
            raise NotFoundException("task", task_id)
        return doc

    async def create(self, task: TaskEntity) -> TaskResult:
        """Persist task under a fresh id; created_at == updated_at."""
        task_id = generate_cuid()
        now = self._clock()
        data: dict[str, Any] = {
            "title": task.title,
            "description": task.description,
            "status": task.status,
            "owner_id": task.owner_id,
            "created_at": now,
            "updated_at": now,
            "deleted_at": None,
            "search_terms": search_terms(task.title, task.description),
        }
        await self._run("create", self._coll.create(task_id, data))
        return _to_result(task_id, data)

    async def get_by_id(self, task_id: str) -> TaskResult:
        """Return live task by id; NotFoundException if absent or soft-deleted."""
        doc = await self._get_live(task_id, "get")
        return _to_result(doc.id, doc.to_dict())

    async def _write_live(
        self,
        task_id: str,
        operation: str,
        build_writes: Callable[[dict[str, Any]], dict[str, Any]],
    ) -> DocumentSnapshot:
        """Write to a live task, guarded by the updateTime of the read.

        The PATCH carries currentDocument.updateTime, so it lands only if the
        document is unchanged since it was seen live. On a precondition
        failure the task is read again: gone or soft-deleted means
        NotFoundException, otherwise the write is rebuilt and resent.
        """
        for _ in range(MAX_WRITE_ATTEMPTS):
            current = await self._get_live(task_id, operation)
            writes = build_writes(current.to_dict())
            try:
                stored = await self._run(
                    operation,
                    self._coll.document(task_id).update(
                        writes, update_time=current.update_time
                    ),
                )
            except PreconditionFailedError:
                logger.info("Task %s changed during %s; re-reading", task_id, operation)
                continue
            if stored is None:
                raise NotFoundException("task", task_id)
            return stored
        logger.error(
            "Task store %s of %s gave up after %s conflicting writes",
            operation,
            task_id,
            MAX_WRITE_ATTEMPTS,
        )
        raise StoreException(operation)

    async def update(self, task_id: str, updates: dict[str, Any]) -> TaskResult:
        """Write title/description/status (others dropped) and stamp updated_at."""
        allowed = filter_task_updates(updates)

        def build_writes(current: dict[str, Any]) -> dict[str, Any]:
            writes: dict[str, Any] = dict(allowed)
            writes["updated_at"] = self._clock()
            if "title" in allowed or "description" in allowed:
                merged = {**current, **allowed}
                writes["search_terms"] = search_terms(
                    merged.get("title"), merged.get("description")
                )
            return writes

        stored = await self._write_live(task_id, "update", build_writes)
        return _to_result(task_id, stored.to_dict())

    async def delete(self, task_id: str) -> None:
        """Soft-delete: set deleted_at and updated_at; the document is kept."""

        def build_writes(current: dict[str, Any]) -> dict[str, Any]:
            now = self._clock()
            return {"deleted_at": now, "updated_at": now}

        await self._write_live(task_id, "delete", build_writes)

    async def list(self, task_filter: TaskFilter) -> list[TaskResult]:
        """Return live tasks matching the filter, newest first."""
        query = self._coll.where("deleted_at", "==", None)
        if task_filter.owner_id:
            query = query.where("owner_id", "==", task_filter.owner_id)
        if task_filter.status:
            query = query.where("status", "==", task_filter.status)
        if task_filter.search is not None:
            terms = search_terms(task_filter.search)[:MAX_SEARCH_TERMS]
            if not terms:
                return []
            query = query.where("search_terms", "array-contains-any", terms)
        query = (
            query.order_by("created_at", "DESCENDING")
            .offset(task_filter.offset)
            .limit(task_filter.limit)
        )

        async def _collect() -> list[TaskResult]:
            return [
                _to_result(snapshot.id, snapshot.to_dict())
                async for snapshot in query.stream()
            ]

        return await self._run("list", _collect())

    async def ping(self) -> bool:
        """Return True if the store answers within the timeout."""
        try:
            await self._run("ping", self._client.ping(COLLECTION_TASKS))
        except StoreException:
            return False
        return True
