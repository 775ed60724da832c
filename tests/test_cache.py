"""
Tests for the caching layer.

These tests verify:
- Hits within the TTL, misses and eviction after it
- Overwrite and clear semantics
- Statistics
- Configuration from settings
"""

import pytest
from datetime import timedelta

from src.cache import CacheConfig, CacheTTL, DatasetCache, create_dataset_cache
from src.models import Dataset


# =============================================================================
# DATASET CACHE TESTS
# =============================================================================

class TestDatasetCache:
    """Test the single-slot TTL cache."""

    def test_empty_cache_misses(self, clock):
        """A new cache has nothing to return."""
        cache = DatasetCache(clock=clock)
        assert cache.get() is None
        assert cache.age is None

    def test_hit_within_ttl(self, clock, dataset):
        """Stored dataset is returned until the TTL elapses."""
        cache = DatasetCache(ttl=timedelta(seconds=300), clock=clock)
        cache.set(dataset)

        clock.advance(299.9)
        assert cache.get() is dataset

    def test_expires_at_ttl(self, clock, dataset):
        """An entry exactly TTL old is stale and dropped."""
        cache = DatasetCache(ttl=timedelta(seconds=300), clock=clock)
        cache.set(dataset)

        clock.advance(300)
        assert cache.get() is None
        # Eviction is permanent, even if the clock were to move back
        clock.advance(-100)
        assert cache.get() is None

    def test_set_overwrites_and_restarts_ttl(self, clock, dataset):
        """A second set replaces the entry and its capture time."""
        cache = DatasetCache(ttl=timedelta(seconds=10), clock=clock)
        cache.set(Dataset())
        clock.advance(8)
        cache.set(dataset)
        clock.advance(8)

        assert cache.get() is dataset

    def test_clear(self, clock, dataset):
        """clear() reports whether an entry was removed."""
        cache = DatasetCache(clock=clock)
        assert cache.clear() is False

        cache.set(dataset)
        assert cache.clear() is True
        assert cache.get() is None

    def test_disabled_cache_never_hits(self, clock, dataset):
        """With caching off, get() always misses."""
        cache = DatasetCache(enabled=False, clock=clock)
        cache.set(dataset)
        assert cache.get() is None

    def test_age(self, clock, dataset):
        cache = DatasetCache(clock=clock)
        cache.set(dataset)
        clock.advance(12.5)
        assert cache.age == pytest.approx(12.5)

    def test_stats(self, clock, dataset):
        """Hits, misses, writes and evictions are counted."""
        cache = DatasetCache(ttl=timedelta(seconds=60), clock=clock)
        cache.get()
        cache.set(dataset)
        cache.get()
        cache.get()
        clock.advance(61)
        cache.get()

        stats = cache.get_stats()
        assert stats["backend"] == "memory"
        assert stats["ttl_seconds"] == 60
        assert stats["hits"] == 2
        assert stats["misses"] == 2
        assert stats["writes"] == 1
        assert stats["evictions"] == 1
        assert stats["hit_rate_percent"] == 50.0
        assert stats["has_entry"] is False
        assert stats["age_seconds"] is None


# =============================================================================
# CONFIG TESTS
# =============================================================================

class TestCacheConfig:
    """Test cache configuration."""

    def test_default_ttl_is_five_minutes(self):
        assert CacheTTL.DATASET == timedelta(minutes=5)

    def test_ttl_from_seconds(self):
        assert CacheTTL.from_seconds(90) == timedelta(seconds=90)

    def test_non_positive_ttl_falls_back(self):
        """Zero or negative seconds use the default TTL."""
        assert CacheTTL.from_seconds(0) == CacheTTL.DATASET
        assert CacheTTL.from_seconds(-5) == CacheTTL.DATASET

    def test_create_from_config(self):
        """Factory applies enabled flag and TTL."""
        config = CacheConfig(enabled=False, ttl=timedelta(seconds=42))
        cache = create_dataset_cache(config)

        assert cache.enabled is False
        assert cache.ttl == timedelta(seconds=42)
