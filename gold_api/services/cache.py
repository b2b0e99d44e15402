"""In-memory TTL cache with bounded size and FIFO eviction."""

import logging
import threading
import time
from typing import Any, Callable, NamedTuple

from gold_api.config import MAX_CACHE_SIZE

logger = logging.getLogger(__name__)


class CacheEntry(NamedTuple):
    key: str
    value: Any
    created_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.created_at > self.ttl


class CacheService:
    """Thread-safe in-memory cache with per-entry TTL.

    Entries live in an insertion-ordered dict. When the store is full, adding
    a new key evicts the oldest-inserted entry. Overwriting an existing key
    keeps its original position in the eviction order.
    """

    def __init__(self, max_size: int = MAX_CACHE_SIZE, clock: Callable[[], float] = time.time):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._store: dict[str, CacheEntry] = {}
        self._max_size = max_size
        self._clock = clock
        self._lock = threading.Lock()

    def _live_entry(self, key: str) -> CacheEntry | None:
        # Caller holds the lock
        entry = self._store.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._store[key]
            return None
        return entry

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._live_entry(key)
            return None if entry is None else entry.value

    def has(self, key: str) -> bool:
        with self._lock:
            return self._live_entry(key) is not None

    def set(self, key: str, value: Any, ttl: float) -> None:
        with self._lock:
            if key not in self._store and len(self._store) >= self._max_size:
                oldest_key = next(iter(self._store))
                del self._store[oldest_key]
                logger.debug(f"Cache full, evicted {oldest_key}")
            # dict assignment to an existing key keeps its insertion slot
            self._store[key] = CacheEntry(key, value, self._clock(), ttl)

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def purge_expired(self) -> int:
        """Delete every entry that is expired right now. Returns the count removed."""
        with self._lock:
            now = self._clock()
            expired = [k for k, e in self._store.items() if e.is_expired(now)]
            for key in expired:
                del self._store[key]
            return len(expired)

    def stats(self) -> dict[str, Any]:
        """Snapshot of the store. Does not remove expired entries."""
        with self._lock:
            now = self._clock()
            entries = [
                {
                    "key": e.key,
                    "age": now - e.created_at,
                    "ttl": e.ttl,
                    "expired": e.is_expired(now),
                }
                for e in self._store.values()
            ]
            return {"size": len(self._store), "max_size": self._max_size, "entries": entries}

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, key: str) -> bool:
        return self.has(key)


# Global cache instance
gold_cache = CacheService()
