"""
Cache Configuration

Centralized configuration for the dataset cache.

Note: The cache is a single in-memory slot. Nothing is persisted
across process restarts.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from functools import lru_cache

from src.utils.config import get_settings


@dataclass(frozen=True)
class CacheTTL:
    """
    Cache TTL configuration.

    The remote sheet is updated by hand a few times a week, so a short
    TTL only exists to pick up edits without a manual refresh.
    """

    DATASET: timedelta = timedelta(minutes=5)

    @classmethod
    def from_seconds(cls, seconds: int) -> timedelta:
        """TTL from a configured number of seconds (non-positive falls back to default)."""
        if seconds <= 0:
            return cls.DATASET
        return timedelta(seconds=seconds)


@dataclass
class CacheConfig:
    """
    Main cache configuration.

    Settings can be overridden via environment variables:
    - CACHE_ENABLED: Enable/disable caching globally
    - CACHE_TTL_SECONDS: Lifetime of the cached dataset
    """

    enabled: bool = field(default_factory=lambda: get_settings().CACHE_ENABLED)
    ttl: timedelta = field(
        default_factory=lambda: CacheTTL.from_seconds(get_settings().CACHE_TTL_SECONDS)
    )


@lru_cache(maxsize=1)
def get_cache_config() -> CacheConfig:
    """Get singleton cache configuration."""
    return CacheConfig()
