"""Document store interface (port) for the application layer.

The store is an external collaborator; DocumentService depends on this
protocol only. Implementations raise StoreError (or a subclass) on failure.
"""

from __future__ import annotations

from typing import Any, Protocol

from firestore_cache.domain.descriptors import Document


class DocumentStoreProtocol(Protocol):
    """Protocol for an external document database (DIP)."""

    async def get_document(self, collection: str, document_id: str) -> Document | None:
        """Return the document data, or None if it does not exist."""

    async def set_document(
        self, collection: str, document_id: str, document: Document
    ) -> None:
        """Create or overwrite the document."""

    async def update_document(
        self, collection: str, document_id: str, partial: Document
    ) -> None:
        """Merge partial fields into an existing document."""

    async def query_documents(
        self,
        collection: str,
        filters: list[tuple[str, Any]],
        limit: int | None = None,
    ) -> list[Document]:
        """Return documents matching all equality filters, in store order."""
