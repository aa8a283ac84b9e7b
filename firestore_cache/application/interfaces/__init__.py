"""Application ports (protocols implemented by infrastructure)."""

from firestore_cache.application.interfaces.document_store import DocumentStoreProtocol

__all__ = ["DocumentStoreProtocol"]
