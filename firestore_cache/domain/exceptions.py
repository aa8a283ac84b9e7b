"""Domain exceptions for the document cache.

Every error raised by this package derives from DocumentCacheException and
carries message, error_code and details so callers can handle and log
failures consistently.
"""

from typing import Any


class DocumentCacheException(Exception):
    """Base exception for all document cache errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, collection).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(DocumentCacheException):
    """Raised when a descriptor or payload is missing or malformed.

    Always raised before the cache or the store is touched.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class DocumentNotFoundError(DocumentCacheException):
    """Raised when the store reports that a document does not exist."""

    def __init__(self, collection: str, document_id: str) -> None:
        super().__init__(
            f"No such document: {collection}/{document_id}",
            "DOCUMENT_NOT_FOUND",
            {"collection": collection, "document_id": document_id},
        )


class StoreError(DocumentCacheException):
    """Raised when the external document store fails (network, permission, etc.)."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize with message and optional operation / HTTP status.

        Args:
            message: Description of the store failure.
            operation: Store operation that failed (e.g. 'get_document').
            status_code: HTTP status returned by the store, when there is one.
        """
        details: dict[str, Any] = {}
        if operation:
            details["operation"] = operation
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, "STORE_ERROR", details)

