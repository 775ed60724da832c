"""
SEO Dashboard Caching Layer

Single-slot in-memory cache for the fetched dataset:
- DatasetCache: get/set/clear with a TTL and hit/miss statistics
- CacheConfig / CacheTTL: settings-driven configuration

Usage:
    cache = create_dataset_cache()
    dataset = cache.get()
    if dataset is None:
        dataset = await fetch_all(client)
        cache.set(dataset)
"""

from src.cache.config import CacheConfig, CacheTTL, get_cache_config
from src.cache.dataset_cache import DatasetCache


def create_dataset_cache(config: CacheConfig = None) -> DatasetCache:
    """Build the application's dataset cache from configuration."""
    config = config or get_cache_config()
    return DatasetCache(ttl=config.ttl, enabled=config.enabled)


__all__ = [
    # Config
    "CacheConfig",
    "CacheTTL",
    "get_cache_config",
    # Cache
    "DatasetCache",
    "create_dataset_cache",
]
