"""Domain layer: descriptors and exceptions (no infrastructure imports)."""

from firestore_cache.domain.descriptors import (
    Document,
    DocumentDescriptor,
    QueryDescriptor,
)
from firestore_cache.domain.exceptions import (
    DocumentCacheException,
    DocumentNotFoundError,
    StoreError,
    ValidationError,
)

__all__ = [
    "Document",
    "DocumentCacheException",
    "DocumentDescriptor",
    "DocumentNotFoundError",
    "QueryDescriptor",
    "StoreError",
    "ValidationError",
]
