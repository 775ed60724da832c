"""
Dashboard Sheet API Client

Async HTTP client for the read-only spreadsheet API with:
- Connection pooling (one shared httpx.AsyncClient)
- Request timeout
- Optional retry with exponential backoff
- Envelope unwrapping and error reporting
"""

import asyncio
import httpx
import logging
from typing import Any, Dict, List, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)


# Resources exposed by the sheet API, in fetch order
RESOURCES = (
    "domainInfo",
    "keywordTypesBrand",
    "keywordTypesNonBrand",
    "longTailKeywords",
    "competitors",
)


def safe_get_rows(payload: Any, resource: str) -> List[Dict[str, Any]]:
    """
    Unwrap the row list from a sheet API response.

    Each response is an object with a single field named after the
    resource, holding a list of row objects.

    Args:
        payload: Parsed JSON body
        resource: Resource name (e.g. "domainInfo")

    Returns:
        List of row dicts (non-dict entries are dropped)

    Raises:
        DashboardAPIError: If the envelope is missing or not a list
    """
    if not isinstance(payload, dict):
        raise DashboardAPIError(
            f"Malformed response for {resource}: expected an object",
            resource=resource,
        )

    rows = payload.get(resource)
    if not isinstance(rows, list):
        raise DashboardAPIError(
            f"Malformed response for {resource}: missing '{resource}' list",
            resource=resource,
        )

    return [row for row in rows if isinstance(row, dict)]


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""
    max_retries: int = 0
    initial_delay: float = 1.0
    max_delay: float = 10.0
    exponential_base: float = 2.0
    retryable_status_codes: tuple = (429, 500, 502, 503, 504)


class DashboardAPIError(Exception):
    """Raised when the sheet API cannot deliver a usable response."""
    def __init__(self, message: str, status_code: int = None, resource: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.resource = resource


class SheetAPIClient:
    """
    Async client for the dashboard sheet API.

    Usage:
        client = SheetAPIClient(base_url="https://api.sheety.co/<id>/bcSeoDashboard")

        rows = await client.get_rows("domainInfo")

        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        retry_config: Optional[RetryConfig] = None,
        timeout: float = 15.0,
        max_connections: int = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API base URL; resources are appended as path segments
            retry_config: Retry configuration (optional, no retries by default)
            timeout: Request timeout in seconds
            max_connections: Maximum concurrent connections
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.retry_config = retry_config or RetryConfig()

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max_connections,
            ),
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

        self._closed = False

    async def get(self, resource: str) -> Dict[str, Any]:
        """
        GET one resource and return the parsed JSON body.

        Raises:
            DashboardAPIError: On HTTP, timeout or decoding errors
        """
        if self._closed:
            raise DashboardAPIError("Client is closed", resource=resource)

        if self.retry_config.max_retries > 0:
            return await self._request_with_retry(resource)
        return await self._make_request(resource)

    async def get_rows(self, resource: str) -> List[Dict[str, Any]]:
        """GET one resource and unwrap its row list."""
        payload = await self.get(resource)
        rows = safe_get_rows(payload, resource)
        logger.debug(f"Fetched {len(rows)} rows from {resource}")
        return rows

    async def _make_request(self, resource: str) -> Dict[str, Any]:
        """Make a single HTTP request."""
        url = f"/{resource}"
        logger.debug(f"GET {url}")

        try:
            response = await self._client.get(url)
        except httpx.TimeoutException as e:
            raise DashboardAPIError(f"Request timed out: {e}", resource=resource) from e
        except httpx.HTTPError as e:
            raise DashboardAPIError(f"HTTP error: {e}", resource=resource) from e

        if response.status_code != 200:
            raise DashboardAPIError(
                f"API request failed for {resource}: {response.status_code}",
                status_code=response.status_code,
                resource=resource,
            )

        try:
            return response.json()
        except ValueError as e:
            raise DashboardAPIError(
                f"Invalid JSON from {resource}: {e}",
                status_code=response.status_code,
                resource=resource,
            ) from e

    async def _request_with_retry(self, resource: str) -> Dict[str, Any]:
        """Make request with automatic retry on transient failure."""
        last_exception = None
        delay = self.retry_config.initial_delay

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                return await self._make_request(resource)

            except DashboardAPIError as e:
                last_exception = e

                # Only retry timeouts/transport errors and retryable statuses
                if e.status_code and e.status_code not in self.retry_config.retryable_status_codes:
                    raise

                if attempt < self.retry_config.max_retries:
                    logger.warning(
                        f"Request failed (attempt {attempt + 1}/{self.retry_config.max_retries + 1}): {e}. "
                        f"Retrying in {delay}s..."
                    )
                    await asyncio.sleep(delay)
                    delay = min(
                        delay * self.retry_config.exponential_base,
                        self.retry_config.max_delay
                    )

        raise last_exception

    async def close(self):
        """Close the HTTP client."""
        if not self._closed:
            await self._client.aclose()
            self._closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def create_client(settings=None) -> SheetAPIClient:
    """Create a client from application settings."""
    if settings is None:
        from src.utils.config import get_settings
        settings = get_settings()

    return SheetAPIClient(
        base_url=settings.DASHBOARD_API_BASE_URL,
        retry_config=RetryConfig(max_retries=settings.API_MAX_RETRIES),
        timeout=settings.API_TIMEOUT,
    )
