"""
Dataset Fetch

Collects the full dashboard dataset through 5 parallel API calls:
- Domain info
- Brand keyword types
- Non-brand keyword types
- Long-tail keywords
- Competitors

All five requests are awaited together; a failure in one does not cancel
the others, but any failure fails the whole fetch.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from src.collector.client import RESOURCES, DashboardAPIError
from src.collector.normalize import (
    build_competitor,
    build_domain_info,
    build_keyword_types,
    build_long_tail_keyword,
)
from src.models import Dataset

logger = logging.getLogger(__name__)


async def fetch_all(client) -> Dataset:
    """
    Fetch and normalize every dashboard resource.

    Args:
        client: SheetAPIClient instance

    Returns:
        Dataset assembled from the five resources

    Raises:
        DashboardAPIError: If any request failed or returned a malformed body
    """
    logger.info("Fetching dashboard dataset")

    tasks = [client.get_rows(resource) for resource in RESOURCES]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    rows: Dict[str, List[Dict[str, Any]]] = {}
    failures: Dict[str, BaseException] = {}
    for name, result in zip(RESOURCES, results):
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, Exception):
            logger.warning(f"Failed to fetch {name}: {result}")
            failures[name] = result
        else:
            rows[name] = result
            logger.debug(f"Collected {name}: {len(result)} rows")

    if failures:
        first = next(iter(failures.values()))
        raise DashboardAPIError(
            f"Failed to fetch {', '.join(failures)}",
            status_code=getattr(first, "status_code", None),
            resource=next(iter(failures)),
        )

    dataset = build_dataset(rows)
    logger.info(f"Dataset ready: {dataset.row_counts}")
    return dataset


def build_dataset(rows: Dict[str, List[Dict[str, Any]]]) -> Dataset:
    """Assemble a Dataset from unwrapped rows keyed by resource name."""
    return Dataset(
        domain_info=tuple(build_domain_info(r) for r in rows.get("domainInfo", [])),
        keyword_types_brand=tuple(
            build_keyword_types(rows.get("keywordTypesBrand", []), "keywordTypesBrand")
        ),
        keyword_types_non_brand=tuple(
            build_keyword_types(rows.get("keywordTypesNonBrand", []), "keywordTypesNonBrand")
        ),
        long_tail_keywords=tuple(
            build_long_tail_keyword(r) for r in rows.get("longTailKeywords", [])
        ),
        competitors=tuple(build_competitor(r) for r in rows.get("competitors", [])),
        fetched_at=datetime.now(timezone.utc),
    )
