"""Input validation shared by all DocumentService operations.

Pure functions with no side effects. Each accepts either a descriptor
dataclass or a plain mapping with the same keys, and returns a normalized
descriptor. Failures raise ValidationError before any cache or store access.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from firestore_cache.domain.descriptors import DocumentDescriptor, QueryDescriptor
from firestore_cache.domain.exceptions import ValidationError

_MISSING_VALUES = "Incorrect input, all values are required"


def _field(target: Any, name: str) -> Any:
    """Read a descriptor field from a mapping or an object; None if absent."""
    if isinstance(target, Mapping):
        return target.get(name)
    return getattr(target, name, None)


def _type_name(value: Any) -> str:
    return type(value).__name__


def validate_document_descriptor(target: Any) -> DocumentDescriptor:
    """Validate collection + id and return a DocumentDescriptor.

    Raises:
        ValidationError: If either field is missing, not a str, or empty.
    """
    if target is None:
        raise ValidationError(_MISSING_VALUES)
    collection = _field(target, "collection")
    document_id = _field(target, "id")
    if collection is None or document_id is None:
        raise ValidationError(
            _MISSING_VALUES, field="collection" if collection is None else "id"
        )
    if not isinstance(collection, str) or not isinstance(document_id, str):
        raise ValidationError(
            "Expected collection of type str and id of type str but got "
            f"collection of type {_type_name(collection)} and id of type "
            f"{_type_name(document_id)}",
            field="collection" if not isinstance(collection, str) else "id",
        )
    if not collection:
        raise ValidationError("collection must not be empty", field="collection")
    if not document_id:
        raise ValidationError("id must not be empty", field="id")
    return DocumentDescriptor(collection=collection, id=document_id)


def validate_document_payload(document: Any) -> dict[str, Any]:
    """Validate a create/update payload (any string-keyed mapping)."""
    if document is None:
        raise ValidationError(_MISSING_VALUES, field="document")
    if not isinstance(document, Mapping):
        raise ValidationError(
            f"Expected document of type dict but got document of type {_type_name(document)}",
            field="document",
        )
    return dict(document)


def validate_update_payload(partial: Any) -> dict[str, Any]:
    """Validate an update payload; it must name at least one field.

    An empty partial would reach the store as an update with no field mask,
    which Firestore applies as a full overwrite.
    """
    data = validate_document_payload(partial)
    if not data:
        raise ValidationError(
            "Update payload must contain at least one field", field="document"
        )
    return data


def validate_query_descriptor(target: Any) -> QueryDescriptor:
    """Validate collection + optional limit and return a QueryDescriptor.

    Raises:
        ValidationError: If collection is missing, not a str or empty, or
            limit is given and is not a positive int.
    """
    collection = None if target is None else _field(target, "collection")
    if collection is None:
        raise ValidationError(
            "Incorrect input, collection name not provided", field="collection"
        )
    if not isinstance(collection, str):
        raise ValidationError(
            "Expected collection of type str but got collection of type "
            f"{_type_name(collection)}",
            field="collection",
        )
    if not collection:
        raise ValidationError("collection must not be empty", field="collection")
    limit = _field(target, "limit")
    if limit is not None:
        # bool is an int subclass; True is not a limit
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ValidationError(
                f"Expected limit of type int but got limit of type {_type_name(limit)}",
                field="limit",
            )
        if limit <= 0:
            raise ValidationError(
                f"limit must be a positive integer, got {limit}", field="limit"
            )
    return QueryDescriptor(collection=collection, limit=limit)


def validate_filters(filters: Any) -> Mapping[str, Any] | None:
    """Validate optional equality filters (field -> value)."""
    if filters is None:
        return None
    if not isinstance(filters, Mapping):
        raise ValidationError(
            f"Expected filters of type dict but got filters of type {_type_name(filters)}",
            field="filters",
        )
    for name in filters:
        if not isinstance(name, str) or not name:
            raise ValidationError(
                f"Filter field names must be non-empty strings, got {name!r}",
                field="filters",
            )
    return filters
