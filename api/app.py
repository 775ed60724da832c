"""
Dashboard Web Application

FastAPI app that serves the multi-country SEO dashboard:
1. Creates the sheet API client, dataset cache and controller on startup
2. Starts the initial data load in the background
3. Serves the HTML dashboard, its JSON view and cache endpoints
"""

import asyncio
import logging
import sys
from datetime import datetime

from fastapi import FastAPI, Request

from api import cache as cache_api
from api import dashboard as dashboard_api
from src import __version__
from src.cache import create_dataset_cache
from src.collector import create_client, fetch_all
from src.dashboard.controller import DashboardController
from src.models import LanguageVariant, Selection, get_country
from src.utils.config import get_settings

settings = get_settings()

# Configure logging to stdout
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
    force=True,
)
logger = logging.getLogger(__name__)

# Quiet down chatty loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

# Create FastAPI app
app = FastAPI(
    title="Multi-Country SEO Dashboard",
    description="Keyword, intent and competitor metrics per country and language",
    version=__version__,
)

app.include_router(dashboard_api.router)
app.include_router(cache_api.router)


def build_controller():
    """Wire client, cache and controller from settings; returns (controller, client)."""
    client = create_client(settings)
    country = get_country(settings.DEFAULT_COUNTRY)
    selection = Selection(
        country_code=country.code if country else "PL",
        variant=LanguageVariant(settings.DEFAULT_VARIANT.lower()),
    )

    controller = DashboardController(
        fetcher=lambda: fetch_all(client),
        cache=create_dataset_cache(),
        selection=selection,
        keywords_page_size=settings.KEYWORDS_PAGE_SIZE,
        competitors_page_size=settings.COMPETITORS_PAGE_SIZE,
    )
    return controller, client


# ============================================================================
# STARTUP / SHUTDOWN
# ============================================================================

@app.on_event("startup")
async def startup_event():
    """Create the controller and start the first load."""
    logger.info(f"Starting dashboard ({settings.ENVIRONMENT}), data from {settings.DASHBOARD_API_BASE_URL}")
    controller, client = build_controller()
    app.state.controller = controller
    app.state.client = client
    app.state.initial_load = asyncio.ensure_future(controller.load())


@app.on_event("shutdown")
async def shutdown_event():
    """Cancel in-flight loads and close the HTTP client."""
    controller = getattr(app.state, "controller", None)
    if controller is not None:
        await controller.close()
    client = getattr(app.state, "client", None)
    if client is not None:
        await client.close()
    logger.info("Dashboard stopped")


# ============================================================================
# API ENDPOINTS
# ============================================================================

@app.get("/api/health")
async def health(request: Request):
    """Health check including data load status."""
    controller = getattr(request.app.state, "controller", None)
    dataset = controller.dataset if controller else None

    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": __version__,
        "data_status": controller.status.value if controller else "not_started",
        "data_fetched_at": dataset.fetched_at.isoformat() if dataset else None,
        "cache": controller.cache.get_stats() if controller else None,
    }


# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.app:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
    )
