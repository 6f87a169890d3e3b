"""Thread-safe, append-only memoization caches for case conversions."""

import threading
from typing import Callable, Dict, Hashable, Optional

from ..core import get_logger

logger = get_logger(__name__)


class ConversionCache:
    """
    Memoizes a pure string conversion, keyed by its exact input.

    Entries are never evicted. The lock only protects the underlying dict;
    values are computed outside of it, so two threads racing on the same
    new key may both compute it. The first stored value is kept.
    """

    def __init__(self, name: str):
        """
        Initialize an empty cache.

        Args:
            name: Label used in stats and log output.
        """
        self.name = name
        self._entries: Dict[Hashable, str] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable) -> Optional[str]:
        """Return the cached value for key, or None."""
        with self._lock:
            value = self._entries.get(key)
            if value is None:
                self.misses += 1
            else:
                self.hits += 1
            return value

    def get_or_compute(self, key: Hashable, compute: Callable[[], str]) -> str:
        """
        Return the cached value for key, computing and storing it on a miss.

        Args:
            key: Exact input (or input tuple) being converted.
            compute: Zero-argument callable producing the converted value.

        Returns:
            The memoized conversion result.
        """
        value = self.get(key)
        if value is not None:
            return value

        value = compute()
        logger.debug(f"Cached {self.name} conversion for {key!r}")

        with self._lock:
            return self._entries.setdefault(key, value)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> dict:
        """Get cache statistics."""
        with self._lock:
            total_requests = self.hits + self.misses
            return {
                "name": self.name,
                "size": len(self._entries),
                "hits": self.hits,
                "misses": self.misses,
                "hit_rate": self.hits / total_requests if total_requests else 0.0
            }
