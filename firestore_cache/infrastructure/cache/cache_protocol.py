"""Cache protocol for the document service (DIP)."""

from typing import Protocol


class CacheProtocol(Protocol):
    """Protocol for cache backends holding serialized (JSON string) values."""

    def get(self, key: str) -> str | None:
        """Return cached value or None if missing or expired."""
        ...

    def put(self, key: str, value: str, ttl: float | None = None) -> None:
        """Store value with optional TTL in seconds."""
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...
