"""
Pytest Configuration and Shared Fixtures

Provides raw sheet payloads, a normalized dataset and helpers shared by
all test modules.
"""

import pytest
import pytest_asyncio
from typing import Any, Dict, List

import httpx

from src.collector.client import SheetAPIClient
from src.collector.fetch import build_dataset
from src.models import Dataset


BASE_URL = "https://sheets.test/dashboard"


# ============================================================================
# Mock Data Fixtures
# ============================================================================

def _long_tail_rows() -> List[Dict[str, Any]]:
    rows = [
        {
            "countryCode": "PL-PL",
            "keyword": f"buty do biegania {i}",
            "tag": "running",
            "position": i,
            "volume": 1000 - i * 10,
            "difficulty": 20 + i,
            "traffic": 120 - i,
            "CPC": 0.85,
            "positionType": "organic",
            "intent": "Commercial",
        }
        for i in range(1, 24)
    ]
    rows.append({
        "countryCode": "FR-FR",
        "keyword": "chaussures de course",
        "position": 4,
        "volume": "2,400",
        "difficulty": 55,
        "traffic": 310,
        "CPC": "1.20",
        "positionType": "organic",
        "intent": "Transactional",
    })
    return rows


@pytest.fixture
def raw_payloads() -> Dict[str, Dict[str, Any]]:
    """Sheet API bodies keyed by resource, in mixed field casing."""
    return {
        "domainInfo": {
            "domainInfo": [
                {
                    "countryCode": "PL-PL",
                    "countryName": "Poland",
                    "domainName": "example.pl",
                    "totalKeywords": 1200,
                    "totalKeywordsBrand": 300,
                    "totalKeywordsNonBrand": 900,
                    "avgDifficultyBrand": 25,
                    "avgDifficultyNonBrand": 42.5,
                    "nbBigKwOpportunities": 37,
                    "id": 2,
                },
                {
                    "country_code": "FR-FR",
                    "country_name": "France",
                    "domain_name": "example.fr",
                    "total_keywords": "800",
                    "total_keywords_brand": "200",
                    "total_keywords_non_brand": "600",
                    "avg_difficulty_brand": "61",
                    "avg_difficulty_non_brand": "",
                    "nb_big_kw_opportunities": None,
                },
            ]
        },
        "keywordTypesBrand": {
            "keywordTypesBrand": [
                {"countryCode": "PL-PL", "name": "Informational", "percent": 0.5},
                {"countryCode": "PL-PL", "name": "Commercial", "percent": 0.3},
                {"countryCode": "PL-PL", "name": "Transactional", "percent": 0.2},
                {"countryCode": "FR-FR", "name": "Commercial", "percent": 30},
                {"countryCode": "FR-FR", "name": "Informational", "percent": 70},
            ]
        },
        "keywordTypesNonBrand": {
            "keywordTypesNonBrand": [
                {"countryCode": "PL-PL", "name": "Informational", "percent": 60},
                {"countryCode": "PL-PL", "name": "Navigational", "percent": 40},
                {"countryCode": "PL-EN", "name": "Local", "percent": 100},
            ]
        },
        "longTailKeywords": {"longTailKeywords": _long_tail_rows()},
        "competitors": {
            "competitors": [
                {
                    "countryCode": "PL",
                    "countryName": "Poland",
                    "domain": f"rival{i}.pl",
                    "competitorRelevance": 0.9 - i * 0.1,
                    "commonKeywords": 500 - i * 50,
                    "organicKeywords": 4000,
                    "organicTraffic": 15000,
                    "organicCost": 1234.5,
                    "googleAdsKeywords": 12,
                }
                for i in range(6)
            ] + [
                {"countryCode": "FR", "domain": "rival.fr", "organicCost": "987.4"},
            ]
        },
    }


@pytest.fixture
def raw_rows(raw_payloads) -> Dict[str, List[Dict[str, Any]]]:
    """Unwrapped row lists keyed by resource."""
    return {name: body[name] for name, body in raw_payloads.items()}


@pytest.fixture
def dataset(raw_rows) -> Dataset:
    """Normalized dataset built from the raw rows."""
    return build_dataset(raw_rows)


@pytest.fixture
def mock_transport(raw_payloads):
    """httpx transport serving raw_payloads by path."""
    def handler(request: httpx.Request) -> httpx.Response:
        resource = request.url.path.rsplit("/", 1)[-1]
        if resource not in raw_payloads:
            return httpx.Response(404, json={"error": "not found"})
        return httpx.Response(200, json=raw_payloads[resource])

    return httpx.MockTransport(handler)


@pytest_asyncio.fixture
async def sheet_client(mock_transport):
    """SheetAPIClient wired to the mock transport."""
    client = SheetAPIClient(base_url=BASE_URL, transport=mock_transport)
    yield client
    await client.close()


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
