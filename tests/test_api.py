"""
Tests for the HTTP API.

The app's startup hook is not run; each test injects its own controller
through the get_controller dependency.
"""

import pytest
from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from api.app import app
from api.dashboard import get_controller
from src.collector import DashboardAPIError
from src.dashboard import DashboardController


@pytest.fixture
def controller(dataset) -> DashboardController:
    return DashboardController(fetcher=AsyncMock(return_value=dataset))


@pytest.fixture
def client(controller):
    app.dependency_overrides[get_controller] = lambda: controller
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestDashboardJSON:
    """Test GET /api/dashboard."""

    def test_default_selection(self, client):
        response = client.get("/api/dashboard")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ready"
        assert data["composite_key"] == "PL-PL"
        assert data["domain_info"]["total_keywords"] == 1200
        assert data["domain_info"]["brand_share"] == 25.0
        assert [s["name"] for s in data["brand_keywords"]] == ["Informational", "Commercial", "Transactional"]
        assert data["long_tail_keywords"]["pagination"]["total_pages"] == 3
        assert len(data["long_tail_keywords"]["items"]) == 10
        assert data["competitors"]["pagination"]["page_size"] == 5

    def test_last_keyword_page(self, client):
        data = client.get("/api/dashboard", params={"kw_page": 3}).json()

        page = data["long_tail_keywords"]
        assert len(page["items"]) == 3
        assert page["pagination"]["has_next"] is False

    def test_page_size(self, client):
        data = client.get("/api/dashboard", params={"kw_size": 25}).json()

        pagination = data["long_tail_keywords"]["pagination"]
        assert pagination["total_pages"] == 1
        assert pagination["end_item"] == 23

    def test_english_variant(self, client):
        data = client.get("/api/dashboard", params={"country": "pl", "variant": "english"}).json()

        assert data["composite_key"] == "PL-EN"
        assert data["domain_info"] is None
        assert len(data["competitors"]["items"]) == 5

    def test_fractional_shares_scaled(self, client):
        data = client.get("/api/dashboard").json()
        assert [round(s["percent"]) for s in data["brand_keywords"]] == [50, 30, 20]

    def test_unknown_country(self, client):
        assert client.get("/api/dashboard", params={"country": "XX"}).status_code == 400

    def test_unknown_variant(self, client):
        assert client.get("/api/dashboard", params={"variant": "klingon"}).status_code == 400

    def test_cached_between_requests(self, client, controller):
        client.get("/api/dashboard")
        client.get("/api/dashboard", params={"country": "FR"})
        assert controller._fetcher.await_count == 1


class TestDashboardPage:
    """Test the HTML endpoints."""

    def test_page(self, client):
        response = client.get("/", params={"country": "PL"})

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "1,200" in response.text

    def test_refresh_redirects(self, client, controller):
        client.get("/")
        response = client.post(
            "/refresh",
            params={"country": "FR", "variant": "english"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/?country=FR&variant=english"
        assert controller._fetcher.await_count == 2


class TestErrors:
    """Test failed loads and recovery."""

    @pytest.fixture
    def controller(self, dataset) -> DashboardController:
        fetcher = AsyncMock(side_effect=[DashboardAPIError("Failed to fetch competitors"), dataset])
        return DashboardController(fetcher=fetcher)

    def test_error_then_retry(self, client, controller):
        response = client.get("/")
        assert response.status_code == 503
        assert "Failed to load SEO data. Please try again." in response.text

        assert client.get("/api/dashboard").status_code == 503
        # Page views do not re-fetch on their own
        assert controller._fetcher.await_count == 1

        client.post("/refresh", follow_redirects=False)
        response = client.get("/api/dashboard")
        assert response.status_code == 200
        assert response.json()["domain_info"]["total_keywords"] == 1200


class TestMisc:
    """Test countries, cache and health endpoints."""

    def test_countries(self, client):
        codes = [c["code"] for c in client.get("/api/countries").json()]
        assert codes == ["PL", "ES", "FR", "DE", "NL"]

    def test_cache_stats_and_invalidate(self, client):
        client.get("/api/dashboard")

        stats = client.get("/api/cache/stats").json()
        assert stats["has_entry"] is True
        assert stats["writes"] == 1

        result = client.post("/api/cache/invalidate").json()
        assert result["success"] is True
        assert result["keys_invalidated"] == 1
        assert client.get("/api/cache/stats").json()["has_entry"] is False

    def test_health(self, client):
        data = client.get("/api/health").json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"
