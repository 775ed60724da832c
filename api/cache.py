"""
Cache Management API

Provides endpoints for cache monitoring and manual operations.

Endpoints:
- Statistics for dashboard insights
- Manual invalidation for debugging
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.dashboard import get_controller
from src.dashboard.controller import DashboardController


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/cache", tags=["Cache Management"])


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class CacheStatsResponse(BaseModel):
    """Cache statistics response."""
    enabled: bool
    backend: str
    ttl_seconds: float
    has_entry: bool
    age_seconds: Optional[float] = None
    hits: int
    misses: int
    writes: int
    evictions: int
    hit_rate_percent: float


class InvalidationResponse(BaseModel):
    """Cache invalidation response."""
    success: bool
    keys_invalidated: int
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get("/stats", response_model=CacheStatsResponse)
def get_cache_stats(controller: DashboardController = Depends(get_controller)):
    """
    Get current cache statistics.

    Note: Stats are reset on application restart.
    """
    return CacheStatsResponse(**controller.cache.get_stats())


@router.post("/invalidate", response_model=InvalidationResponse)
def invalidate_cache(controller: DashboardController = Depends(get_controller)):
    """
    Drop the cached dataset.

    The next page view fetches fresh data from the sheet API.
    """
    removed = controller.cache.clear()
    logger.info(f"Cache invalidated via API (entry removed: {removed})")
    return InvalidationResponse(success=True, keys_invalidated=int(removed))
