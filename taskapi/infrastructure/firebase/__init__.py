"""Firestore (REST) integration: client factory and repositories."""

from taskapi.infrastructure.firebase._rest_client import FirestoreRESTClient
from taskapi.infrastructure.firebase.client import create_firestore_client

__all__ = [
    "FirestoreRESTClient",
    "create_firestore_client",
]
