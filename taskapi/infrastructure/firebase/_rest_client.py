"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
Keeps the dependency footprint small (avoids grpcio / firebase-admin).
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Without credentials the client talks to the Firestore emulator, which
accepts the fixed "owner" bearer token.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

import httpx

from taskapi.infrastructure.firebase._rest_encoding import (
    _encode_value,
    decode_document,
    encode_document,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
DEFAULT_BASE_URL = "https://firestore.googleapis.com/v1"
DEFAULT_DATABASE = "(default)"
EMULATOR_TOKEN = "owner"


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    params: list[tuple[str, str]] | None = None,
) -> Any:
    """Perform one Firestore REST call.

    404 returns None. A failed write precondition raises
    PreconditionFailedError; any other 409 raises DocumentExistsError.
    """
    if method not in ("GET", "POST", "PATCH"):
        raise ValueError(f"Unsupported method: {method!r}")
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    resp = await client.request(
        method,
        url,
        headers=headers,
        params=params,
        content=json.dumps(body) if body is not None else None,
    )
    if resp.status_code == 404:
        return None
    if resp.status_code in (400, 409):
        status = _error_status(resp)
        if status in _PRECONDITION_STATUSES:
            raise PreconditionFailedError(status)
        if resp.status_code == 409:
            raise DocumentExistsError("Document already exists")
    resp.raise_for_status()
    return resp.json() if resp.content else {}


# FAILED_PRECONDITION: currentDocument did not match; ABORTED: write contention.
_PRECONDITION_STATUSES = frozenset({"FAILED_PRECONDITION", "ABORTED"})


def _error_status(resp: httpx.Response) -> str:
    """Return the google.rpc status name of an error response, or ""."""
    try:
        payload = resp.json()
    except ValueError:
        return ""
    error = payload.get("error") if isinstance(payload, dict) else None
    return error.get("status", "") if isinstance(error, dict) else ""


def _doc_id(name: str) -> str:
    return name.split("/")[-1] if name else ""


class DocumentExistsError(Exception):
    """Raised when createDocument returns 409 (document ID already exists)."""


class PreconditionFailedError(Exception):
    """Raised when a write's currentDocument precondition does not hold."""


class DocumentSnapshot:
    """Snapshot of a document (id + data + server updateTime)."""

    def __init__(self, id_: str, data: dict, update_time: str | None = None):
        self.id = id_
        self._data = data
        self.update_time = update_time

    @classmethod
    def from_rest(cls, doc: dict[str, Any]) -> DocumentSnapshot:
        return cls(
            _doc_id(doc.get("name", "")),
            decode_document(doc.get("fields")),
            doc.get("updateTime"),
        )

    def to_dict(self) -> dict:
        return self._data


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return _doc_id(self._path)

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await _request_async(
            self._client._http,
            self._client.url(self._path),
            access_token=await self._client.get_token(),
        )
        if not out:
            return None
        return DocumentSnapshot.from_rest({"name": self._path, **out})

    async def update(
        self, data: dict[str, Any], *, update_time: str | None = None
    ) -> DocumentSnapshot | None:
        """Merge the given fields into an existing document.

        Only the listed fields are written (update mask). With update_time the
        write lands only if the document is unchanged since that snapshot,
        otherwise PreconditionFailedError; without it the document must merely
        exist. Returns the document as stored after the write, or None if it
        did not exist.
        """
        params = [("updateMask.fieldPaths", field) for field in data]
        if update_time is not None:
            params.append(("currentDocument.updateTime", update_time))
        else:
            params.append(("currentDocument.exists", "true"))
        out = await _request_async(
            self._client._http,
            self._client.url(self._path),
            method="PATCH",
            body=encode_document(data),
            access_token=await self._client.get_token(),
            params=params,
        )
        if out is None:
            return None
        return DocumentSnapshot.from_rest({"name": self._path, **out})


_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
    "!=": "NOT_EQUAL",
    "array-contains-any": "ARRAY_CONTAINS_ANY",
}

_NULL_OPS = {"EQUAL": "IS_NULL", "NOT_EQUAL": "IS_NOT_NULL"}


def _build_filter(field: str, op: str, value: Any) -> dict[str, Any]:
    """Return one structured-query filter. Equality with None becomes IS_NULL."""
    wire_op = _OP_MAP.get(op, op)
    if value is None and wire_op in _NULL_OPS:
        return {
            "unaryFilter": {"field": {"fieldPath": field}, "op": _NULL_OPS[wire_op]}
        }
    return {
        "fieldFilter": {
            "field": {"fieldPath": field},
            "op": wire_op,
            "value": _encode_value(value),
        }
    }


class _Query:
    """Fluent query builder for collection; runs via runQuery (filter/order/offset/limit on server).

    Multiple where() calls are combined with AND.
    """

    def __init__(
        self,
        client: FirestoreRESTClient,
        parent: str,
        collection_id: str,
    ):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._filters: list[dict[str, Any]] = []
        self._order_by_field: str | None = None
        self._order_direction: str = "ASCENDING"
        self._offset: int = 0
        self._limit: int = 100

    def where(self, field: str, op: str, value: Any) -> _Query:
        self._filters.append(_build_filter(field, op, value))
        return self

    def order_by(self, field: str, direction: str = "ASCENDING") -> _Query:
        self._order_by_field = field
        self._order_direction = direction
        return self

    def offset(self, n: int) -> _Query:
        self._offset = n
        return self

    def limit(self, n: int) -> _Query:
        self._limit = n
        return self

    def to_structured_query(self) -> dict[str, Any]:
        """Return the runQuery structuredQuery body for this query."""
        structured: dict[str, Any] = {
            "from": [{"collectionId": self._collection_id}],
        }
        if len(self._filters) == 1:
            structured["where"] = self._filters[0]
        elif self._filters:
            structured["where"] = {
                "compositeFilter": {"op": "AND", "filters": list(self._filters)}
            }
        if self._order_by_field is not None:
            structured["orderBy"] = [
                {
                    "field": {"fieldPath": self._order_by_field},
                    "direction": self._order_direction,
                }
            ]
        if self._offset:
            structured["offset"] = self._offset
        if self._limit:
            structured["limit"] = self._limit
        return structured

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        body = {"structuredQuery": self.to_structured_query()}
        resp = await _request_async(
            self._client._http,
            self._client.url(f"{self._parent}:runQuery"),
            method="POST",
            body=body,
            access_token=await self._client.get_token(),
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            if "document" not in item:
                continue
            yield DocumentSnapshot.from_rest(item["document"])


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path.rstrip("/")

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    async def create(self, document_id: str, data: dict[str, Any]) -> None:
        """Create a document with the given ID (fail with DocumentExistsError if it exists)."""
        await _request_async(
            self._client._http,
            self._client.url(self._path),
            method="POST",
            body=encode_document(data),
            access_token=await self._client.get_token(),
            params=[("documentId", document_id)],
        )

    def _query(self) -> _Query:
        parent = self._path.rsplit("/", 1)[0]
        collection_id = self._path.split("/")[-1]
        return _Query(self._client, parent, collection_id)

    def where(self, field: str, op: str, value: Any) -> _Query:
        """Start a query with a filter. Chain .where(), .order_by(), .offset(), .limit(), then .stream()."""
        return self._query().where(field, op, value)

    async def stream(self, page_size: int | None = None) -> AsyncIterator[DocumentSnapshot]:
        """List documents in the collection (shallow, first page only)."""
        params = [("pageSize", str(page_size))] if page_size else None
        out = await _request_async(
            self._client._http,
            self._client.url(self._path),
            access_token=await self._client.get_token(),
            params=params,
        )
        if not out:
            return
        for doc in out.get("documents", []):
            yield DocumentSnapshot.from_rest(doc)


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials=None,
        *,
        database: str = DEFAULT_DATABASE,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._database = database
        self._base_url = base_url.rstrip("/")
        self._prefix = f"projects/{project_id}/databases/{database}/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def database(self) -> str:
        return self._database

    def url(self, path: str) -> str:
        """Return the absolute REST URL for a resource path."""
        return f"{self._base_url}/{quote(path, safe='/:()')}"

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        if self._credentials is None:
            return EMULATOR_TOKEN
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")

    async def ping(self, collection_id: str) -> None:
        """Round-trip a one-document page of collection_id; raises on any failure."""
        async for _ in self.collection(collection_id).stream(page_size=1):
            break
