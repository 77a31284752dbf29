"""Bounded, time-expiring cache of template contents.

Entries expire a fixed TTL after insertion; reads never extend the TTL.
When the cache is full, inserting a new key first evicts the entry with the
smallest expiry. The get/evict/insert sequence runs under a lock because
reads complete on worker threads.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    value: V
    expires_at: float


class ContentCache(Generic[K, V]):
    def __init__(
        self,
        max_size: int = 100,
        ttl_seconds: float = 300.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[K, CacheEntry[V]] = {}
        self._lock = threading.RLock()
        self.evictions = 0

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: K, value: V) -> None:
        with self._lock:
            if key not in self._entries and len(self._entries) >= self.max_size:
                self._evict_one()
            self._entries[key] = CacheEntry(value, self._clock() + self.ttl_seconds)

    def _evict_one(self) -> None:
        oldest = min(self._entries, key=lambda k: self._entries[k].expires_at)
        del self._entries[oldest]
        self.evictions += 1
        logger.debug("Evicted cache entry %s", oldest)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def keys(self) -> list:
        with self._lock:
            return list(self._entries)


__all__ = ["CacheEntry", "ContentCache"]
