"""
Dashboard Controller

Owns the selection (country + language variant), loads the dataset
through the cache, and exposes the derived view, the two table
paginators and the two keyword-type pie charts.

Loading:
1. Unless forced, a fresh cached dataset is used as-is
2. Otherwise the load joins the fetch already in flight, or starts one;
   the result is cached and applied. The dataset does not depend on the
   selection, so selection changes never restart a fetch
3. Each fetch carries a generation number. refresh() cancels the fetch
   in flight and starts a new generation; a result whose generation has
   been superseded is dropped, so a slow fetch can never overwrite the
   state of a newer refresh
4. Fetch errors become an error state (dataset cleared); retry() forces
   a fresh fetch
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from src.cache.dataset_cache import DatasetCache
from src.collector.client import DashboardAPIError
from src.dashboard.pagination import Paginator
from src.dashboard.views import DashboardView, derive_view
from src.models import (
    Competitor,
    Dataset,
    LanguageVariant,
    LongTailKeyword,
    Selection,
    get_country,
)
from src.reporter.charts import PieSlice, pie_slices

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[Dataset]]


class LoadStatus(str, Enum):
    """Lifecycle of the dashboard data."""
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class DashboardController:
    """
    Selection state and data loading for the dashboard.

    Usage:
        controller = DashboardController(fetcher=lambda: fetch_all(client))
        await controller.load()
        await controller.select(country="FR", variant=LanguageVariant.ENGLISH)
        controller.keywords.next_page()
    """

    ERROR_MESSAGE = "Failed to load SEO data. Please try again."

    def __init__(
        self,
        fetcher: Fetcher,
        cache: Optional[DatasetCache] = None,
        selection: Optional[Selection] = None,
        keywords_page_size: int = 10,
        competitors_page_size: int = 5,
    ):
        self._fetcher = fetcher
        self.cache = cache if cache is not None else DatasetCache()
        self.selection = selection or Selection()

        self.status = LoadStatus.IDLE
        self.error: Optional[str] = None
        self.dataset: Optional[Dataset] = None

        self._generation = 0
        self._inflight: Optional[asyncio.Future] = None

        self.keywords: Paginator[LongTailKeyword] = Paginator((), keywords_page_size)
        self.competitors: Paginator[Competitor] = Paginator((), competitors_page_size)
        self._view = derive_view(None, self.selection)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_loading(self) -> bool:
        return self.status is LoadStatus.LOADING

    @property
    def view(self) -> DashboardView:
        return self._view

    @property
    def brand_slices(self) -> List[PieSlice]:
        return pie_slices((k.percent, k.color) for k in self._view.brand_keywords)

    @property
    def non_brand_slices(self) -> List[PieSlice]:
        return pie_slices((k.percent, k.color) for k in self._view.non_brand_keywords)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self, force_refresh: bool = False) -> bool:
        """
        Load the dataset, from cache when possible.

        A load that misses the cache joins a fetch already in flight, so
        concurrent viewers share one request. A forced load supersedes it.

        Args:
            force_refresh: Skip the cache and start a new fetch

        Returns:
            True if this load's result was applied, False if it failed or
            was superseded by a newer fetch
        """
        if not force_refresh:
            cached = self.cache.get()
            if cached is not None:
                self._apply(cached)
                return True

        if force_refresh or self._inflight is None or self._inflight.done():
            self._start_fetch()
        task = self._inflight
        generation = self._generation

        try:
            # Shielded: a cancelled caller leaves the shared fetch running
            dataset = await asyncio.shield(task)
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.debug(f"Load {generation} cancelled (superseded by {self._generation})")
                return False
            raise
        except DashboardAPIError as e:
            return self._fail(generation, e)
        except Exception as e:
            logger.exception("Unexpected error while loading dashboard data")
            return self._fail(generation, e)

        if generation != self._generation:
            logger.debug(f"Discarding result of load {generation} (current is {self._generation})")
            return False

        self._apply(dataset)
        return True

    async def refresh(self) -> bool:
        """Drop the cached dataset and fetch a new one."""
        self.cache.clear()
        return await self.load(force_refresh=True)

    async def retry(self) -> bool:
        """Retry after a failed load."""
        return await self.refresh()

    async def select(
        self,
        country: Optional[str] = None,
        variant: Optional[LanguageVariant] = None,
    ) -> bool:
        """
        Change country and/or language variant, then load.

        Raises:
            ValueError: For an unknown country code or variant
        """
        code = self.selection.country_code
        if country is not None:
            match = get_country(country)
            if match is None:
                raise ValueError(f"Unknown country code: {country}")
            code = match.code

        variant = LanguageVariant(variant) if variant is not None else self.selection.variant

        self.set_selection(Selection(country_code=code, variant=variant))
        return await self.load()

    def set_selection(self, selection: Selection) -> None:
        """Switch the view to selection without loading."""
        self.selection = selection
        self._refresh_view()

    async def toggle_language(self) -> bool:
        return await self.select(variant=self.selection.variant.toggled)

    async def close(self) -> None:
        """Cancel any in-flight fetch."""
        self._generation += 1
        self._cancel_inflight()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _start_fetch(self) -> None:
        """Cancel any in-flight fetch and start a new generation."""
        self._cancel_inflight()
        self._generation += 1
        self.status = LoadStatus.LOADING
        self.error = None
        self._inflight = asyncio.ensure_future(self._fetch(self._generation))

    async def _fetch(self, generation: int) -> Dataset:
        dataset = await self._fetcher()
        if generation == self._generation:
            self.cache.set(dataset)
        return dataset

    def _cancel_inflight(self) -> None:
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._inflight = None

    def _apply(self, dataset: Dataset) -> None:
        self.dataset = dataset
        self.status = LoadStatus.READY
        self.error = None
        self._refresh_view()

    def _fail(self, generation: int, error: Exception) -> bool:
        if generation != self._generation:
            logger.debug(f"Ignoring failure of superseded load {generation}: {error}")
            return False

        logger.error(f"Dashboard load failed: {error}")
        self.status = LoadStatus.ERROR
        self.error = self.ERROR_MESSAGE
        self.dataset = None
        self.cache.clear()
        self._refresh_view()
        return False

    def _refresh_view(self) -> None:
        view = derive_view(self.dataset, self.selection)
        if view != self._view:
            self.keywords.set_items(view.long_tail_keywords)
            self.competitors.set_items(view.competitors)
        self._view = view
