"""Document service: validated, cached access to an external document store.

Every operation runs validation -> key derivation -> cache lookup or store
write -> cache population. Reads are read-through, writes are
write-through. Store and validation failures propagate unchanged and never
populate the cache.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from firestore_cache.application.interfaces.document_store import DocumentStoreProtocol
from firestore_cache.application.services.request_validator import (
    validate_document_descriptor,
    validate_document_payload,
    validate_filters,
    validate_query_descriptor,
    validate_update_payload,
)
from firestore_cache.domain.descriptors import Document
from firestore_cache.domain.exceptions import DocumentNotFoundError
from firestore_cache.infrastructure.cache.cache_protocol import CacheProtocol
from firestore_cache.infrastructure.cache.keys import document_key, query_key
from firestore_cache.infrastructure.cache.memory_cache import MemoryCache

logger = logging.getLogger(__name__)


class DocumentService:
    """Create / read-one / read-many / update-one over a store, with a cache in front.

    The cache is owned by this instance unless one is injected. A cache hit
    never reaches the store, so changes made to the store by other writers
    are only seen once the entry expires or is overwritten through here.
    """

    def __init__(
        self,
        store: DocumentStoreProtocol,
        cache: CacheProtocol | None = None,
        *,
        cache_ttl_seconds: float = 3600,
        cache_max_megabytes: float = 64,
        sort_query_filters: bool = False,
    ) -> None:
        """Initialize the service.

        Args:
            store: External document store.
            cache: Optional cache (shared or for tests); a MemoryCache sized
                from cache_max_megabytes is created when omitted.
            cache_ttl_seconds: TTL applied to every entry written.
            cache_max_megabytes: Budget for the cache created here.
            sort_query_filters: Canonicalize filter order in query keys.
        """
        self.store = store
        self.cache_ttl_seconds = cache_ttl_seconds
        self.sort_query_filters = sort_query_filters
        self.cache: CacheProtocol = (
            cache
            if cache is not None
            else MemoryCache(
                max_megabytes=cache_max_megabytes, default_ttl=cache_ttl_seconds
            )
        )

    async def create(self, descriptor: Any, document: Any) -> None:
        """Write a new document to the store, then cache it.

        Args:
            descriptor: DocumentDescriptor (or mapping) with collection and id.
            document: Document data.

        Raises:
            ValidationError: If descriptor or document is malformed.
            StoreError: If the store write fails.
        """
        target = validate_document_descriptor(descriptor)
        data = validate_document_payload(document)
        key = document_key(target.collection, target.id)
        await self.store.set_document(target.collection, target.id, data)
        self._populate(key, data)

    async def read_one(self, descriptor: Any) -> Document:
        """Return one document, from the cache when present.

        Raises:
            ValidationError: If descriptor is malformed.
            DocumentNotFoundError: If the store has no such document.
            StoreError: If the store read fails.
        """
        target = validate_document_descriptor(descriptor)
        key = document_key(target.collection, target.id)
        cached = self.cache.get(key)
        if cached is not None:
            return json.loads(cached)
        document = await self.store.get_document(target.collection, target.id)
        if document is None:
            raise DocumentNotFoundError(target.collection, target.id)
        self._populate(key, document)
        return document

    async def read_many(
        self, query: Any, filters: Mapping[str, Any] | None = None
    ) -> list[Document]:
        """Return documents matching equality filters, from the cache when present.

        Filters are applied in the mapping's iteration order, which is also
        the order of the segments in the cache key.

        Args:
            query: QueryDescriptor (or mapping) with collection and optional limit.
            filters: Optional equality filters (field -> value).

        Raises:
            ValidationError: If query or filters are malformed.
            StoreError: If the store query fails.
        """
        target = validate_query_descriptor(query)
        filters = validate_filters(filters)
        key = query_key(
            target.collection,
            target.limit,
            filters,
            sort_filters=self.sort_query_filters,
        )
        cached = self.cache.get(key)
        if cached is not None:
            return json.loads(cached)
        predicates = list(filters.items()) if filters else []
        documents = list(
            await self.store.query_documents(target.collection, predicates, target.limit)
        )
        self._populate(key, documents)
        return documents

    async def update_one(self, descriptor: Any, partial: Any) -> Document:
        """Update fields of one document and return the full refreshed document.

        The refreshed document is fetched from the store, never from the cache.

        Raises:
            ValidationError: If descriptor or partial is malformed, or partial
                is empty.
            DocumentNotFoundError: If the document is gone after the update.
            StoreError: If the update or the re-fetch fails.
        """
        target = validate_document_descriptor(descriptor)
        data = validate_update_payload(partial)
        key = document_key(target.collection, target.id)
        await self.store.update_document(target.collection, target.id, data)
        document = await self.store.get_document(target.collection, target.id)
        if document is None:
            raise DocumentNotFoundError(target.collection, target.id)
        self._populate(key, document)
        return document

    def clear_cache(self) -> None:
        """Drop every cached document and query result."""
        self.cache.clear()

    def _populate(self, key: str, value: Any) -> None:
        self.cache.put(key, json.dumps(value, default=str), self.cache_ttl_seconds)
