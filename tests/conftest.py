"""Pytest configuration and fixtures for firestore_cache.

Store fixtures are AsyncMocks of DocumentStoreProtocol; the cache uses a
manual clock so TTL tests never sleep.
"""

from unittest.mock import AsyncMock

import pytest

from firestore_cache.application.interfaces.document_store import DocumentStoreProtocol
from firestore_cache.application.services.document_service import DocumentService
from firestore_cache.infrastructure.cache.memory_cache import MemoryCache


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> MemoryCache:
    """64 MB cache with a one hour default TTL on the fake clock."""
    return MemoryCache(max_megabytes=64, default_ttl=3600, clock=clock)


@pytest.fixture
def store() -> AsyncMock:
    """Document store double; every method is an AsyncMock returning None."""
    mock = AsyncMock(spec=DocumentStoreProtocol)
    mock.get_document.return_value = None
    mock.set_document.return_value = None
    mock.update_document.return_value = None
    mock.query_documents.return_value = []
    return mock


@pytest.fixture
def service(store: AsyncMock, cache: MemoryCache) -> DocumentService:
    return DocumentService(store, cache, cache_ttl_seconds=3600)
