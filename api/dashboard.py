"""
Dashboard API

Serves the dashboard for one selection:
- HTML page (cards, pie charts, paginated tables)
- JSON view with pagination metadata and pie slice geometry
- Manual refresh / retry
- Static country list

The page state lives in the query string (country, variant, page numbers
and page sizes), so every request re-applies it to the shared controller.
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import BaseModel, Field

from src.dashboard.controller import DashboardController, LoadStatus
from src.dashboard.pagination import Paginator
from src.models import COUNTRIES, LanguageVariant, Selection, get_country
from src.reporter.charts import PieSlice
from src.reporter.dashboard import DashboardPageBuilder

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Dashboard"])

page_builder = DashboardPageBuilder(base_path="/", refresh_path="/refresh")


def get_controller(request: Request) -> DashboardController:
    """The process-wide controller created at startup."""
    return request.app.state.controller


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class CountryResponse(BaseModel):
    code: str
    name: str
    native: str
    english: str


class DomainInfoResponse(BaseModel):
    """Overview cards for the selected key"""
    country_code: str
    country_name: str
    domain_name: str
    total_keywords: int
    total_keywords_brand: int
    total_keywords_non_brand: int
    brand_share: float = Field(..., description="Brand keywords as % of total")
    non_brand_share: float
    avg_difficulty_brand: float
    avg_difficulty_non_brand: float
    nb_big_kw_opportunities: int


class PieSliceResponse(BaseModel):
    """One slice of a keyword-type pie chart"""
    name: str
    percent: float
    color: str
    share: float
    path: str
    large_arc: bool
    label: Optional[str] = None
    label_x: Optional[float] = None
    label_y: Optional[float] = None


class PaginationInfo(BaseModel):
    current_page: int
    page_size: int
    total_pages: int
    total_items: int
    start_item: int
    end_item: int
    has_next: bool
    has_previous: bool


class LongTailKeywordResponse(BaseModel):
    keyword: str
    tag: str
    position: int
    volume: int
    difficulty: float
    traffic: float
    cpc: float
    position_type: str
    intent: str


class CompetitorResponse(BaseModel):
    domain: str
    competitor_relevance: float
    common_keywords: int
    organic_keywords: int
    organic_traffic: float
    organic_cost: float
    google_ads_keywords: int


class KeywordPage(BaseModel):
    pagination: PaginationInfo
    items: List[LongTailKeywordResponse]


class CompetitorPage(BaseModel):
    pagination: PaginationInfo
    items: List[CompetitorResponse]


class DashboardResponse(BaseModel):
    """Everything the dashboard shows for one selection"""
    status: str
    country: str
    variant: str
    composite_key: str
    fetched_at: Optional[datetime] = None
    domain_info: Optional[DomainInfoResponse] = None
    brand_keywords: List[PieSliceResponse] = []
    non_brand_keywords: List[PieSliceResponse] = []
    long_tail_keywords: KeywordPage
    competitors: CompetitorPage


# =============================================================================
# HELPERS
# =============================================================================

def parse_selection(country: str, variant: str) -> Selection:
    """
    Validate query parameters into a Selection.

    Raises HTTPException 400 for unknown values.
    """
    match = get_country(country)
    if match is None:
        raise HTTPException(status_code=400, detail=f"Unknown country: {country}")
    try:
        language = LanguageVariant(variant.lower())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown variant: {variant}")
    return Selection(country_code=match.code, variant=language)


def apply_page_state(paginator: Paginator, page: int, size: Optional[int]) -> None:
    if size is not None and size != paginator.page_size:
        paginator.set_page_size(size)
    paginator.go_to_page(page)


def _slice_responses(shares, slices: List[PieSlice]) -> List[PieSliceResponse]:
    return [
        PieSliceResponse(
            name=shares[s.index].name,
            percent=shares[s.index].percent,
            color=s.color,
            share=round(s.share, 4),
            path=s.path,
            large_arc=s.large_arc,
            label=s.label,
            label_x=s.label_x,
            label_y=s.label_y,
        )
        for s in slices
    ]


async def _prepare(
    controller: DashboardController,
    selection: Selection,
    kw_page: int,
    kw_size: Optional[int],
    comp_page: int,
    comp_size: Optional[int],
) -> None:
    # A failed load is only retried through /refresh
    if controller.status is not LoadStatus.ERROR:
        await controller.select(country=selection.country_code, variant=selection.variant)
    # Another request may have switched the shared selection while this one waited
    controller.set_selection(selection)
    apply_page_state(controller.keywords, kw_page, kw_size)
    apply_page_state(controller.competitors, comp_page, comp_size)


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get("/", response_class=HTMLResponse)
async def dashboard_page(
    country: str = Query("PL", description="Country code"),
    variant: str = Query("native", description="native or english"),
    kw_page: int = Query(1, description="Long-tail keywords page"),
    kw_size: Optional[int] = Query(None, ge=1, le=100, description="Long-tail keywords page size"),
    comp_page: int = Query(1, description="Competitors page"),
    comp_size: Optional[int] = Query(None, ge=1, le=100, description="Competitors page size"),
    controller: DashboardController = Depends(get_controller),
):
    """Render the dashboard (or its loading / error page) as HTML."""
    selection = parse_selection(country, variant)
    await _prepare(controller, selection, kw_page, kw_size, comp_page, comp_size)

    status_code = 503 if controller.status is LoadStatus.ERROR else 200
    return HTMLResponse(page_builder.build(controller, selection), status_code=status_code)


@router.post("/refresh")
async def refresh_dashboard(
    country: str = Query("PL"),
    variant: str = Query("native"),
    controller: DashboardController = Depends(get_controller),
):
    """
    Force a fresh fetch, bypassing the cache.

    Also used as the retry action after a failed load.
    """
    selection = parse_selection(country, variant)
    logger.info(f"Manual refresh requested ({selection.composite_key})")
    controller.set_selection(selection)
    await controller.refresh()
    return RedirectResponse(
        url=page_builder.url_for(selection),
        status_code=303,
    )


@router.get("/api/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    country: str = Query("PL", description="Country code"),
    variant: str = Query("native", description="native or english"),
    kw_page: int = Query(1),
    kw_size: Optional[int] = Query(None, ge=1, le=100),
    comp_page: int = Query(1),
    comp_size: Optional[int] = Query(None, ge=1, le=100),
    controller: DashboardController = Depends(get_controller),
):
    """
    Get the derived dashboard view as JSON.

    Returns 503 when the last load failed; status "loading" while a newer
    load is still in flight.
    """
    selection = parse_selection(country, variant)
    await _prepare(controller, selection, kw_page, kw_size, comp_page, comp_size)

    if controller.status is LoadStatus.ERROR:
        raise HTTPException(status_code=503, detail=controller.error)

    view = controller.view
    info = view.domain_info

    return DashboardResponse(
        status=controller.status.value,
        country=selection.country_code,
        variant=selection.variant.value,
        composite_key=selection.composite_key,
        fetched_at=controller.dataset.fetched_at if controller.dataset else None,
        domain_info=DomainInfoResponse(
            country_code=info.country_code,
            country_name=info.country_name,
            domain_name=info.domain_name,
            total_keywords=info.total_keywords,
            total_keywords_brand=info.total_keywords_brand,
            total_keywords_non_brand=info.total_keywords_non_brand,
            brand_share=round(info.brand_share, 2),
            non_brand_share=round(info.non_brand_share, 2),
            avg_difficulty_brand=info.avg_difficulty_brand,
            avg_difficulty_non_brand=info.avg_difficulty_non_brand,
            nb_big_kw_opportunities=info.nb_big_kw_opportunities,
        ) if info else None,
        brand_keywords=_slice_responses(view.brand_keywords, controller.brand_slices),
        non_brand_keywords=_slice_responses(view.non_brand_keywords, controller.non_brand_slices),
        long_tail_keywords=KeywordPage(
            pagination=PaginationInfo(**controller.keywords.to_dict()),
            items=[
                LongTailKeywordResponse(
                    keyword=k.keyword,
                    tag=k.tag,
                    position=k.position,
                    volume=k.volume,
                    difficulty=k.difficulty,
                    traffic=k.traffic,
                    cpc=k.cpc,
                    position_type=k.position_type,
                    intent=k.intent,
                )
                for k in controller.keywords.items
            ],
        ),
        competitors=CompetitorPage(
            pagination=PaginationInfo(**controller.competitors.to_dict()),
            items=[
                CompetitorResponse(
                    domain=c.domain,
                    competitor_relevance=c.competitor_relevance,
                    common_keywords=c.common_keywords,
                    organic_keywords=c.organic_keywords,
                    organic_traffic=c.organic_traffic,
                    organic_cost=c.organic_cost,
                    google_ads_keywords=c.google_ads_keywords,
                )
                for c in controller.competitors.items
            ],
        ),
    )


@router.get("/api/countries", response_model=List[CountryResponse])
async def list_countries():
    """Countries the dashboard can show."""
    return [
        CountryResponse(code=c.code, name=c.name, native=c.native, english=c.english)
        for c in COUNTRIES
    ]
