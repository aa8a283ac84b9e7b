"""Cache key builders. Single place for key format (DRY).

Document keys are "doc:<collection>:<id>". Query keys are
"query:<collection>:<limit>" followed by one "-<field>:<value>" segment per filter,
in the iteration order of the filter mapping unless sort_filters is set.

The leading kind tag keeps document and query keys apart, so an id such as
"0" never reads back a cached query result. Collections must not contain
CACHE_KEY_SEP; ids may, since the collection is a fixed-position segment.
"""

from collections.abc import Mapping
from typing import Any

from firestore_cache.core.constants import (
    CACHE_FILTER_PREFIX,
    CACHE_KEY_SEP,
    CACHE_NO_LIMIT,
    CACHE_PREFIX_DOCUMENT,
    CACHE_PREFIX_QUERY,
)
from firestore_cache.domain.exceptions import ValidationError


def _validate_collection(collection: str) -> None:
    """Raise ValidationError if the collection contains the key separator.

    Args:
        collection: Collection name used as the key prefix.

    Raises:
        ValidationError: If collection contains CACHE_KEY_SEP.
    """
    if CACHE_KEY_SEP in collection:
        raise ValidationError(
            f"Collection name {collection!r} must not contain separator {CACHE_KEY_SEP!r}",
            field="collection",
        )


def _format_filter_value(value: Any) -> str:
    """Render a filter value the way it appears in a query key."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_format_filter_value(v) for v in value)
    return str(value)


def document_key(collection: str, document_id: str) -> str:
    """Cache key for a single document."""
    _validate_collection(collection)
    return (
        f"{CACHE_PREFIX_DOCUMENT}{CACHE_KEY_SEP}{collection}"
        f"{CACHE_KEY_SEP}{document_id}"
    )


def query_key(
    collection: str,
    limit: int | None = None,
    filters: Mapping[str, Any] | None = None,
    *,
    sort_filters: bool = False,
) -> str:
    """Cache key for a filtered, optionally limited, collection query.

    Args:
        collection: Collection being queried.
        limit: Max documents; None is written as CACHE_NO_LIMIT.
        filters: Equality filters (field -> value).
        sort_filters: Order segments by field name instead of mapping order.

    Returns:
        Deterministic key for this collection/limit/filters combination.
    """
    _validate_collection(collection)
    key = (
        f"{CACHE_PREFIX_QUERY}{CACHE_KEY_SEP}{collection}"
        f"{CACHE_KEY_SEP}{limit or CACHE_NO_LIMIT}"
    )
    if filters:
        items = (
            sorted(filters.items(), key=lambda item: item[0])
            if sort_filters
            else filters.items()
        )
        for field, value in items:
            key += f"{CACHE_FILTER_PREFIX}{field}{CACHE_KEY_SEP}{_format_filter_value(value)}"
    return key
