"""Request descriptors: what to read or write.

Descriptors are never persisted; they address the store and derive cache
keys. Field types are not enforced here, see request_validator.
"""

from dataclasses import dataclass
from typing import Any

# Opaque document payload (string-keyed map of JSON-serializable values)
Document = dict[str, Any]


@dataclass(frozen=True)
class DocumentDescriptor:
    """Identifies exactly one document."""

    collection: str
    id: str


@dataclass(frozen=True)
class QueryDescriptor:
    """Identifies a collection query; limit=None means no limit."""

    collection: str
    limit: int | None = None
