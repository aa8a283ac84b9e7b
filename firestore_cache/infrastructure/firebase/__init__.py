"""Firestore integration: REST client and document store adapter."""

from firestore_cache.infrastructure.firebase._rest_client import FirestoreRESTClient
from firestore_cache.infrastructure.firebase.client import build_firestore_client
from firestore_cache.infrastructure.firebase.document_store import FirestoreDocumentStore

__all__ = [
    "FirestoreDocumentStore",
    "FirestoreRESTClient",
    "build_firestore_client",
]
