"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
HTTP and transport failures are raised as StoreError.
"""

from __future__ import annotations

import asyncio
import json
import re
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote, unquote

import httpx

from firestore_cache.domain.exceptions import (
    DocumentNotFoundError,
    StoreError,
    ValidationError,
)
from firestore_cache.infrastructure.firebase._rest_encoding import (
    decode_document,
    encode_document,
    encode_value,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"
_SIMPLE_FIELD = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


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


def _field_path(name: str) -> str:
    """Quote a field name for updateMask / fieldPath when it is not a plain identifier."""
    if _SIMPLE_FIELD.fullmatch(name):
        return name
    escaped = name.replace("\\", "\\\\").replace("`", "\\`")
    return f"`{escaped}`"


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    params: list[tuple[str, str]] | None = None,
    operation: str | None = None,
) -> Any:
    """Perform async HTTP request to Firestore REST API. 404 returns None."""
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method not in ("GET", "PATCH", "POST"):
        raise ValueError(f"Unsupported method: {method!r}")
    try:
        resp = await client.request(
            method,
            url,
            headers=headers,
            json=body if method in ("PATCH", "POST") else None,
            params=params,
        )
    except httpx.HTTPError as e:
        raise StoreError(
            f"Firestore request failed: {e}", operation=operation
        ) from e
    if resp.status_code == 404:
        return None
    if resp.status_code not in (200, 204):
        raise StoreError(
            f"Firestore returned HTTP {resp.status_code}: {resp.text[:200]}",
            operation=operation,
            status_code=resp.status_code,
        )
    raw = resp.content
    try:
        return json.loads(raw.decode()) if raw else {}
    except ValueError as e:
        raise StoreError(
            "Firestore returned a malformed response", operation=operation
        ) from e


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return unquote(self._path.split("/")[-1])

    async def set(self, data: dict[str, Any]) -> None:
        """Create or overwrite the document (PATCH with full replace)."""
        await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            method="PATCH",
            body=encode_document(data),
            access_token=await self._client.get_token(),
            operation="set_document",
        )

    async def update(self, data: dict[str, Any]) -> None:
        """Overwrite only the given top-level fields; the document must exist."""
        if not data:
            # a PATCH without updateMask replaces the whole document
            raise ValidationError(
                "Update payload must contain at least one field", field="document"
            )
        params = [("updateMask.fieldPaths", _field_path(name)) for name in data]
        params.append(("currentDocument.exists", "true"))
        out = await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            method="PATCH",
            body=encode_document(data),
            access_token=await self._client.get_token(),
            params=params,
            operation="update_document",
        )
        if out is None:
            collection = self._path.split("/")[-2]
            raise DocumentNotFoundError(collection, self.id)

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            access_token=await self._client.get_token(),
            operation="get_document",
        )
        if out is None:
            return None
        return DocumentSnapshot(self.id, decode_document(out.get("fields")))


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


def _build_filter(field: str, value: Any) -> dict[str, Any]:
    """Equality filter; None matches documents whose field is null."""
    field_ref = {"fieldPath": _field_path(field)}
    if value is None:
        return {"unaryFilter": {"field": field_ref, "op": "IS_NULL"}}
    return {"fieldFilter": {"field": field_ref, "op": "EQUAL", "value": encode_value(value)}}


class Query:
    """Fluent equality query builder for a collection; runs via runQuery.

    where() calls are ANDed in call order.
    """

    def __init__(self, client: "FirestoreRESTClient", parent: str, collection_id: str):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._filters: list[dict[str, Any]] = []
        self._limit: int | None = None

    def where(self, field: str, value: Any) -> "Query":
        self._filters.append(_build_filter(field, value))
        return self

    def limit(self, n: int) -> "Query":
        self._limit = n
        return self

    def to_structured_query(self) -> dict[str, Any]:
        structured: dict[str, Any] = {
            "from": [{"collectionId": self._collection_id}],
        }
        if len(self._filters) == 1:
            structured["where"] = self._filters[0]
        elif self._filters:
            structured["where"] = {
                "compositeFilter": {"op": "AND", "filters": list(self._filters)}
            }
        if self._limit is not None:
            structured["limit"] = self._limit
        return structured

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        resp = await _request_async(
            self._client._http,
            f"{_BASE}/{self._parent}:runQuery",
            method="POST",
            body={"structuredQuery": self.to_structured_query()},
            access_token=await self._client.get_token(),
            operation="query_documents",
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            if "document" not in item:
                continue
            doc = item["document"]
            name = doc.get("name", "")
            doc_id = name.split("/")[-1] if name else ""
            yield DocumentSnapshot(doc_id, decode_document(doc.get("fields")))


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path.rstrip("/")

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{quote(document_id, safe='')}")

    def query(self) -> Query:
        parent, collection_id = self._path.rsplit("/", 1)
        return Query(self._client, parent, collection_id)


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials=None,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str | None:
        """Return a valid access token; refreshes in thread pool to avoid blocking.

        Returns None without credentials (e.g. against the emulator).
        """
        if self._credentials is None:
            return None
        from google.auth.exceptions import GoogleAuthError

        try:
            return await asyncio.to_thread(_get_access_token, self._credentials)
        except GoogleAuthError as e:
            raise StoreError(f"Could not obtain Firestore access token: {e}") from e

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")
