"""In-process lookup cache shared by the tracker and translation clients."""

import threading
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

V = TypeVar("V")


class LookupCache(Generic[V]):
    """Write-once, never-evicted cache that lives for a single run.

    ``get_or_fetch`` is single-flight: callers racing on the same key wait
    for the first fetch instead of issuing their own, so each key reaches
    the external service at most once. Failed fetches are not stored.
    """

    def __init__(self, name: str) -> None:
        """Initialize cache.

        Args:
            name: Label used in stats output
        """
        self.name = name
        self._entries: Dict[Hashable, V] = {}
        self._key_locks: Dict[Hashable, threading.Lock] = {}
        self._lock = threading.Lock()

        # Stats
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable) -> Optional[V]:
        """Return the cached value or None, without fetching."""
        with self._lock:
            return self._entries.get(key)

    def get_or_fetch(self, key: Hashable, fetch: Callable[[], V]) -> V:
        """Return the cached value for ``key``, calling ``fetch`` on a miss.

        Args:
            key: Lookup key
            fetch: Zero-argument callable producing the value

        Returns:
            Cached or freshly fetched value

        Raises:
            Whatever ``fetch`` raises; nothing is cached in that case
        """
        with self._lock:
            if key in self._entries:
                self.hits += 1
                return self._entries[key]
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                if key in self._entries:
                    self.hits += 1
                    return self._entries[key]
                self.misses += 1

            value = fetch()

            with self._lock:
                self._entries[key] = value
            return value

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with cache stats
        """
        total_requests = self.hits + self.misses
        hit_rate = (self.hits / total_requests * 100) if total_requests > 0 else 0.0

        return {
            "name": self.name,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": f"{hit_rate:.1f}%",
            "entries": len(self),
        }
