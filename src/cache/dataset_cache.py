"""
Dataset Cache

Single-slot, in-memory TTL cache for the most recently fetched dataset.

The dashboard only ever works with one dataset shape, so there is exactly
one entry: set() overwrites it, get() hands it back while it is fresh and
drops it once the TTL has elapsed. Created at application start, reset on
explicit refresh, never persisted.
"""

import logging
import time
from datetime import timedelta
from typing import Callable, Dict, Optional

from src.cache.config import CacheTTL
from src.models import Dataset

logger = logging.getLogger(__name__)


class DatasetCache:
    """
    In-memory cache holding one Dataset with its capture time.

    The clock is injectable so expiry can be tested without sleeping.
    """

    def __init__(
        self,
        ttl: timedelta = CacheTTL.DATASET,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self.enabled = enabled
        self._clock = clock
        self._data: Optional[Dataset] = None
        self._captured_at: Optional[float] = None
        self._stats = {
            "hits": 0,
            "misses": 0,
            "writes": 0,
            "evictions": 0,
        }

    def get(self) -> Optional[Dataset]:
        """
        Get the cached dataset.

        Returns:
            The dataset if present and younger than the TTL, else None.
            An expired entry is dropped.
        """
        if not self.enabled or self._data is None:
            self._stats["misses"] += 1
            return None

        if self._clock() - self._captured_at >= self.ttl.total_seconds():
            logger.debug("Cached dataset expired, evicting")
            self._evict()
            self._stats["evictions"] += 1
            self._stats["misses"] += 1
            return None

        self._stats["hits"] += 1
        return self._data

    def set(self, dataset: Dataset) -> None:
        """Store dataset, replacing whatever was cached."""
        self._data = dataset
        self._captured_at = self._clock()
        self._stats["writes"] += 1

    def clear(self) -> bool:
        """
        Drop the cached dataset.

        Returns:
            True if an entry was removed
        """
        had_entry = self._data is not None
        self._evict()
        if had_entry:
            logger.info("Dataset cache cleared")
        return had_entry

    @property
    def age(self) -> Optional[float]:
        """Seconds since the current entry was stored, or None."""
        if self._data is None:
            return None
        return self._clock() - self._captured_at

    def get_stats(self) -> Dict:
        """Get cache statistics."""
        total = self._stats["hits"] + self._stats["misses"]
        hit_rate = (self._stats["hits"] / total * 100) if total > 0 else 0

        return {
            "enabled": self.enabled,
            "backend": "memory",
            "ttl_seconds": self.ttl.total_seconds(),
            "has_entry": self._data is not None,
            "age_seconds": round(self.age, 3) if self.age is not None else None,
            **self._stats,
            "hit_rate_percent": round(hit_rate, 2),
        }

    def _evict(self) -> None:
        self._data = None
        self._captured_at = None
