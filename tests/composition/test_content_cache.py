from __future__ import annotations

import pytest

from rules_kit.core.composition.cache import ContentCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_get_returns_stored_value() -> None:
    cache = ContentCache(max_size=2, ttl_seconds=10)
    cache.set("a", "A")
    assert cache.get("a") == "A"
    assert cache.get("missing") is None


def test_entries_expire_after_ttl_from_insertion() -> None:
    clock = FakeClock()
    cache = ContentCache(max_size=4, ttl_seconds=10, clock=clock)
    cache.set("a", "A")

    clock.advance(9)
    # Reading does not extend the TTL
    assert cache.get("a") == "A"
    clock.advance(1)
    assert cache.get("a") is None
    assert "a" not in cache


def test_inserting_max_size_plus_one_evicts_earliest_expiry() -> None:
    clock = FakeClock()
    cache = ContentCache(max_size=3, ttl_seconds=60, clock=clock)
    for key in ("k1", "k2", "k3"):
        cache.set(key, key.upper())
        clock.advance(1)

    cache.set("k4", "K4")

    assert cache.evictions == 1
    assert len(cache) == 3
    assert "k1" not in cache
    assert set(cache.keys()) == {"k2", "k3", "k4"}


def test_eviction_ignores_read_recency() -> None:
    clock = FakeClock()
    cache = ContentCache(max_size=2, ttl_seconds=60, clock=clock)
    cache.set("old", 1)
    clock.advance(1)
    cache.set("new", 2)
    clock.advance(1)

    assert cache.get("old") == 1
    cache.set("third", 3)

    assert "old" not in cache
    assert "new" in cache


def test_overwriting_existing_key_does_not_evict() -> None:
    cache = ContentCache(max_size=2, ttl_seconds=60)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("a", 3)

    assert cache.evictions == 0
    assert cache.get("a") == 3


def test_clear_empties_cache() -> None:
    cache = ContentCache(max_size=2, ttl_seconds=60)
    cache.set("a", 1)
    cache.clear()
    assert len(cache) == 0


def test_invalid_bounds_are_rejected() -> None:
    with pytest.raises(ValueError):
        ContentCache(max_size=0)
    with pytest.raises(ValueError):
        ContentCache(ttl_seconds=0)
