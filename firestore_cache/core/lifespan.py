"""Service wiring: startup and shutdown.

Single place that builds a DocumentService from settings (Firestore client,
store adapter, in-memory cache). No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from firestore_cache.application.services.document_service import DocumentService
from firestore_cache.core.config import Settings, get_settings
from firestore_cache.infrastructure.cache.memory_cache import MemoryCache
from firestore_cache.infrastructure.firebase._rest_client import FirestoreRESTClient
from firestore_cache.infrastructure.firebase.client import build_firestore_client
from firestore_cache.infrastructure.firebase.document_store import FirestoreDocumentStore
from firestore_cache.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


def create_document_service(
    settings: Settings | None = None,
    client: FirestoreRESTClient | None = None,
) -> DocumentService:
    """Build a DocumentService backed by Firestore.

    Args:
        settings: Settings to use; get_settings() when omitted.
        client: Optional pre-built Firestore client (for tests or DI).

    Raises:
        RuntimeError: If no client is given and Firestore is not configured.
    """
    settings = settings or get_settings()
    if client is None:
        client = build_firestore_client(settings)
    if client is None:
        raise RuntimeError(
            "Firestore is not configured: set FIREBASE_SERVICE_ACCOUNT_KEY "
            "(full JSON string) or FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file)."
        )
    cache = MemoryCache(
        max_megabytes=settings.cache_max_megabytes,
        default_ttl=settings.cache_ttl_seconds,
    )
    return DocumentService(
        FirestoreDocumentStore(client),
        cache,
        cache_ttl_seconds=settings.cache_ttl_seconds,
        sort_query_filters=settings.cache_sort_query_filters,
    )


@asynccontextmanager
async def document_service_lifespan(
    settings: Settings | None = None,
) -> AsyncIterator[DocumentService]:
    """Yield a Firestore-backed DocumentService; close the HTTP client on exit."""
    settings = settings or get_settings()
    setup_logging(settings)
    client = build_firestore_client(settings)
    service = create_document_service(settings, client)
    try:
        yield service
    finally:
        service.clear_cache()
        if client is not None:
            await client.aclose()
            logger.info("Firestore HTTP client closed")
