"""
SEO Dashboard - Data Collection Package

This package handles all data collection from the sheet API:
- Client: pooled async HTTP access, envelope unwrapping, errors
- Normalize: field naming, numeric coercion, keyword-type colours
- Fetch: the five parallel requests assembled into one Dataset
"""

from .client import (
    RESOURCES,
    DashboardAPIError,
    RetryConfig,
    SheetAPIClient,
    create_client,
    safe_get_rows,
)
from .fetch import build_dataset, fetch_all
from .normalize import (
    DEFAULT_KEYWORD_TYPE_COLOR,
    KEYWORD_TYPE_COLORS,
    to_snake_case,
)

__all__ = [
    # Client
    "RESOURCES",
    "DashboardAPIError",
    "RetryConfig",
    "SheetAPIClient",
    "create_client",
    "safe_get_rows",

    # Fetch
    "build_dataset",
    "fetch_all",

    # Normalization
    "DEFAULT_KEYWORD_TYPE_COLOR",
    "KEYWORD_TYPE_COLORS",
    "to_snake_case",
]
