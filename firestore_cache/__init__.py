"""Cached document access for Firestore.

A bounded, TTL-expiring in-memory cache in front of a document store,
with read-through reads, write-through writes and filtered queries.
"""

from firestore_cache.application.services.document_service import DocumentService
from firestore_cache.core.lifespan import (
    create_document_service,
    document_service_lifespan,
)
from firestore_cache.domain.descriptors import DocumentDescriptor, QueryDescriptor
from firestore_cache.domain.exceptions import (
    DocumentCacheException,
    DocumentNotFoundError,
    StoreError,
    ValidationError,
)
from firestore_cache.infrastructure.cache.memory_cache import MemoryCache

__all__ = [
    "DocumentCacheException",
    "DocumentDescriptor",
    "DocumentNotFoundError",
    "DocumentService",
    "MemoryCache",
    "QueryDescriptor",
    "StoreError",
    "ValidationError",
    "create_document_service",
    "document_service_lifespan",
]
