"""Firestore-backed document store (implements DocumentStoreProtocol)."""

from __future__ import annotations

from typing import Any

from firestore_cache.domain.descriptors import Document
from firestore_cache.infrastructure.firebase._rest_client import FirestoreRESTClient


class FirestoreDocumentStore:
    """Document store over the Firestore REST client. Failures raise StoreError."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    async def get_document(self, collection: str, document_id: str) -> Document | None:
        """Return document data, or None if it does not exist."""
        snapshot = await self._client.collection(collection).document(document_id).get()
        if snapshot is None:
            return None
        return snapshot.to_dict()

    async def set_document(
        self, collection: str, document_id: str, document: Document
    ) -> None:
        """Create or fully overwrite the document."""
        await self._client.collection(collection).document(document_id).set(document)

    async def update_document(
        self, collection: str, document_id: str, partial: Document
    ) -> None:
        """Overwrite the given fields; DocumentNotFoundError if the document is missing."""
        await self._client.collection(collection).document(document_id).update(partial)

    async def query_documents(
        self,
        collection: str,
        filters: list[tuple[str, Any]],
        limit: int | None = None,
    ) -> list[Document]:
        """Return documents matching every equality filter (applied in order)."""
        q = self._client.collection(collection).query()
        for field, value in filters:
            q = q.where(field, value)
        if limit is not None:
            q = q.limit(limit)
        return [snapshot.to_dict() async for snapshot in q.stream()]
