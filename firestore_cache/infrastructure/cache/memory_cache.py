"""In-process TTL cache with a coarse memory budget.

Values are serialized strings. Expiry is lazy (checked on access). The
budget is global: before each insert the whole store is measured and, if it
is over budget, every entry is dropped before the new one goes in.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from firestore_cache.core.constants import CACHE_BYTE_WEIGHT_MB

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Serialized value and the clock reading after which it is stale."""

    value: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return self.expires_at <= now


class MemoryCache:
    """Thread-safe in-memory cache with per-entry TTL and full-flush eviction.

    The size check measures the store as it is before the insert and compares
    with strict greater-than, so a put can leave the store above budget; the
    next put then clears it. The entry being written always survives.
    """

    def __init__(
        self,
        max_megabytes: float = 64,
        default_ttl: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize an empty cache.

        Args:
            max_megabytes: Memory budget, converted with CACHE_BYTE_WEIGHT_MB.
            default_ttl: TTL in seconds used when put() gets none.
            clock: Monotonic time source in seconds (injectable for tests).
        """
        if max_megabytes <= 0:
            raise ValueError(f"max_megabytes must be positive, got {max_megabytes}")
        if default_ttl <= 0:
            raise ValueError(f"default_ttl must be positive, got {default_ttl}")
        self.max_megabytes = max_megabytes
        self.max_bytes = max_megabytes / CACHE_BYTE_WEIGHT_MB
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        """Return the cached value, or None if missing or expired.

        Args:
            key: Cache key (use infrastructure.cache.keys builders).
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug("Cache MISS: %s", key)
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                logger.debug("Cache EXPIRED: %s", key)
                return None
            logger.debug("Cache HIT: %s", key)
            return entry.value

    def put(self, key: str, value: str, ttl: float | None = None) -> None:
        """Store value under key, clearing the whole cache first if over budget.

        Args:
            key: Cache key.
            value: Serialized value.
            ttl: Time-to-live in seconds; defaults to default_ttl.
        """
        ttl = self.default_ttl if ttl is None else ttl
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        with self._lock:
            now = self._clock()
            self._drop_expired(now)
            size = self._measure()
            logger.debug("Cache size: %s bytes (budget %s bytes)", size, self.max_bytes)
            if size > self.max_bytes:
                count = len(self._entries)
                self._entries.clear()
                logger.warning(
                    "Cache CLEARED: %s bytes over budget of %s bytes (%s keys dropped)",
                    size,
                    self.max_bytes,
                    count,
                )
            self._entries[key] = CacheEntry(value=value, expires_at=now + ttl)
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()
        logger.info("Cache CLEARED: all keys deleted")

    def size_in_bytes(self) -> int:
        """Return the UTF-8 size of the serialized store (live entries only)."""
        with self._lock:
            self._drop_expired(self._clock())
            return self._measure()

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for entry in self._entries.values() if not entry.is_expired(now))

    def __contains__(self, key: object) -> bool:
        with self._lock:
            entry = self._entries.get(key)  # type: ignore[arg-type]
            return entry is not None and not entry.is_expired(self._clock())

    def _drop_expired(self, now: float) -> None:
        # caller holds the lock
        stale = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in stale:
            del self._entries[key]

    def _measure(self) -> int:
        # caller holds the lock
        export = {
            key: {"value": entry.value, "expire": entry.expires_at}
            for key, entry in self._entries.items()
        }
        return len(
            json.dumps(export, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        )
