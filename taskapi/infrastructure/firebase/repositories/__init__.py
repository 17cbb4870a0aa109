"""Firestore-backed repository implementations."""

from taskapi.infrastructure.firebase.repositories.task_repo_firestore import (
    FirestoreTaskRepository,
)

__all__ = [
    "FirestoreTaskRepository",
]
