"""Cache: in-memory TTL store and cache key utilities.

Used by DocumentService for read-through / write-through caching; key
format lives in keys.py (DRY).
"""

from firestore_cache.infrastructure.cache.cache_protocol import CacheProtocol
from firestore_cache.infrastructure.cache.keys import document_key, query_key
from firestore_cache.infrastructure.cache.memory_cache import CacheEntry, MemoryCache

__all__ = [
    "CacheEntry",
    "CacheProtocol",
    "MemoryCache",
    "document_key",
    "query_key",
]
