"""Firestore client factory (REST-based, no firebase-admin).

Built once at app creation from settings using either
FIREBASE_SERVICE_ACCOUNT_KEY (JSON string) or FIREBASE_SERVICE_ACCOUNT_PATH
(file path). With neither set, the client runs unauthenticated against
settings.store_uri, which must then point at a Firestore emulator.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from taskapi.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)

if TYPE_CHECKING:
    from taskapi.core.config import Settings

logger = logging.getLogger(__name__)


def _load_key_dict(settings: Settings) -> dict | None:
    """Return service account dict from env key or file path."""
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            raise ValueError(
                f"FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: {path} (resolved: {resolved})"
            )
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def create_firestore_client(settings: Settings) -> FirestoreRESTClient:
    """Build the Firestore client for the configured store.

    The project id comes from the service account when present, else from
    settings.store_project_id. Every HTTP round-trip is bounded by
    settings.store_timeout_seconds.

    Raises:
        ValueError: If a service account is configured but unreadable.
    """
    key_dict = _load_key_dict(settings)
    credentials = None
    project_id = settings.store_project_id
    if key_dict:
        project_id = key_dict.get("project_id") or project_id
        credentials = _get_credentials(key_dict)
    else:
        logger.warning(
            "No Firestore service account configured; using unauthenticated access to %s "
            "(Firestore emulator mode)",
            settings.store_uri,
        )
    logger.info(
        "Firestore client for project %s, database %s at %s",
        project_id,
        settings.store_database,
        settings.store_uri,
    )
    return FirestoreRESTClient(
        project_id,
        credentials,
        database=settings.store_database,
        base_url=settings.store_uri,
        timeout=settings.store_timeout_seconds,
    )
