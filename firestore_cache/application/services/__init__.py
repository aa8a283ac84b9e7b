"""Application services: request validation and the cached document service."""

from firestore_cache.application.services.document_service import DocumentService
from firestore_cache.application.services.request_validator import (
    validate_document_descriptor,
    validate_document_payload,
    validate_filters,
    validate_query_descriptor,
    validate_update_payload,
)

__all__ = [
    "DocumentService",
    "validate_document_descriptor",
    "validate_document_payload",
    "validate_filters",
    "validate_query_descriptor",
    "validate_update_payload",
]
