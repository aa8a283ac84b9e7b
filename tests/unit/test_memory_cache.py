"""Unit tests for MemoryCache (TTL expiry, coarse eviction, byte accounting)."""

import json
import threading

import pytest

from firestore_cache.infrastructure.cache.memory_cache import MemoryCache


def test_get_missing_returns_none(cache: MemoryCache) -> None:
    assert cache.get("nope") is None


def test_put_then_get(cache: MemoryCache) -> None:
    cache.put("users:u1", '{"name": "Ann"}')
    assert cache.get("users:u1") == '{"name": "Ann"}'


def test_put_overwrites_existing_key(cache: MemoryCache) -> None:
    cache.put("k", "old")
    cache.put("k", "new")
    assert cache.get("k") == "new"
    assert len(cache) == 1


def test_value_available_until_ttl_elapses(cache: MemoryCache, clock) -> None:
    """Entry is returned before its TTL and never after, without an explicit clear."""
    cache.put("k", "v", ttl=10)
    clock.advance(9.5)
    assert cache.get("k") == "v"
    clock.advance(0.5)
    assert cache.get("k") is None
    assert "k" not in cache


def test_default_ttl_used_when_none_given(clock) -> None:
    cache = MemoryCache(max_megabytes=1, default_ttl=5, clock=clock)
    cache.put("k", "v")
    clock.advance(4)
    assert cache.get("k") == "v"
    clock.advance(1)
    assert cache.get("k") is None


def test_overwrite_resets_ttl(cache: MemoryCache, clock) -> None:
    cache.put("k", "v1", ttl=10)
    clock.advance(8)
    cache.put("k", "v2", ttl=10)
    clock.advance(8)
    assert cache.get("k") == "v2"


def test_budget_converted_from_megabytes() -> None:
    assert MemoryCache(max_megabytes=64).max_bytes == pytest.approx(64_000_000)
    assert MemoryCache(max_megabytes=0.5).max_bytes == pytest.approx(500_000)


def test_size_in_bytes_measures_serialized_store(cache: MemoryCache) -> None:
    assert cache.size_in_bytes() == len("{}")
    cache.put("k", "v", ttl=10)
    expected = json.dumps({"k": {"value": "v", "expire": 10.0}}, separators=(",", ":"))
    assert cache.size_in_bytes() == len(expected.encode("utf-8"))


def test_size_counts_utf8_bytes(cache: MemoryCache) -> None:
    cache.put("a", "x")
    ascii_size = cache.size_in_bytes()
    cache.clear()
    cache.put("a", "é")
    # "é" is two bytes in UTF-8
    assert cache.size_in_bytes() == ascii_size + 1


def test_over_budget_put_clears_everything_then_inserts(clock) -> None:
    """Full flush happens before the insert; the new entry is retrievable."""
    cache = MemoryCache(max_megabytes=0.0001, default_ttl=60, clock=clock)  # ~100 bytes
    cache.put("big", "x" * 200)
    cache.put("other", "y")
    assert cache.get("big") is None
    assert cache.get("other") == "y"
    assert len(cache) == 1


def test_size_is_measured_before_insert(clock) -> None:
    """A put into a store under budget succeeds even if it leaves the store over budget."""
    cache = MemoryCache(max_megabytes=0.0001, default_ttl=60, clock=clock)
    cache.put("big", "x" * 200)
    assert cache.get("big") == "x" * 200
    assert cache.size_in_bytes() > cache.max_bytes


def test_eviction_uses_strict_greater_than(cache: MemoryCache) -> None:
    cache.put("a", "1")
    cache.max_bytes = cache.size_in_bytes()
    cache.put("b", "2")
    assert cache.get("a") == "1"
    assert cache.get("b") == "2"

    cache.max_bytes = cache.size_in_bytes() - 1
    cache.put("c", "3")
    assert cache.get("a") is None
    assert cache.get("b") is None
    assert cache.get("c") == "3"


def test_expired_entries_do_not_count_toward_budget(clock) -> None:
    cache = MemoryCache(max_megabytes=0.0001, default_ttl=60, clock=clock)
    cache.put("big", "x" * 200, ttl=1)
    cache.put("keep", "k")  # store is over budget here: clears "big"
    cache.put("stale", "x" * 200, ttl=1)
    clock.advance(2)
    cache.put("new", "n")
    assert cache.get("keep") == "k"
    assert cache.get("new") == "n"


def test_clear_removes_all(cache: MemoryCache) -> None:
    cache.put("a", "1")
    cache.put("b", "2")
    cache.clear()
    assert len(cache) == 0
    assert cache.get("a") is None


def test_len_ignores_expired_entries(cache: MemoryCache, clock) -> None:
    cache.put("short", "1", ttl=1)
    cache.put("long", "2", ttl=100)
    clock.advance(5)
    assert len(cache) == 1


@pytest.mark.parametrize("ttl", [0, -1])
def test_non_positive_ttl_rejected(cache: MemoryCache, ttl: int) -> None:
    with pytest.raises(ValueError, match="ttl must be positive"):
        cache.put("k", "v", ttl=ttl)


def test_non_positive_budget_rejected() -> None:
    with pytest.raises(ValueError, match="max_megabytes must be positive"):
        MemoryCache(max_megabytes=0)


def test_concurrent_puts_keep_every_written_key() -> None:
    cache = MemoryCache(max_megabytes=64, default_ttl=60)

    def writer(prefix: str) -> None:
        for i in range(200):
            cache.put(f"{prefix}:{i}", str(i))

    threads = [threading.Thread(target=writer, args=(f"t{n}",)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(cache) == 800
    assert cache.get("t3:199") == "199"
