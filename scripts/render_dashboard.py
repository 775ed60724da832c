#!/usr/bin/env python3
"""
Render Dashboard Script

Fetch the dashboard dataset once and write the HTML page to a file.

Usage:
    python scripts/render_dashboard.py
    python scripts/render_dashboard.py --country FR --variant english -o fr-en.html
"""

import asyncio
import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from src.collector import create_client, fetch_all
from src.dashboard import DashboardController
from src.models import COUNTRIES, LanguageVariant
from src.reporter import DashboardPageBuilder


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


async def render(country: str, variant: str, output: Path) -> bool:
    """Load the data for one selection and write the page."""
    logger = logging.getLogger(__name__)

    async with create_client() as client:
        controller = DashboardController(fetcher=lambda: fetch_all(client))
        await controller.select(country=country, variant=LanguageVariant(variant))

        html = DashboardPageBuilder().build(controller)
        output.write_text(html, encoding="utf-8")

    if controller.error:
        logger.error(f"Load failed, wrote error page to {output}")
        return False

    logger.info(f"Wrote {controller.selection.composite_key} dashboard to {output}")
    return True


def main():
    parser = argparse.ArgumentParser(description="Render the SEO dashboard to an HTML file")
    parser.add_argument(
        "--country", "-c",
        default="PL",
        choices=[c.code for c in COUNTRIES],
        help="Country code (default: PL)",
    )
    parser.add_argument(
        "--variant",
        default=LanguageVariant.NATIVE.value,
        choices=[v.value for v in LanguageVariant],
        help="Language variant (default: native)",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=Path("dashboard.html"),
        help="Output file (default: dashboard.html)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    load_dotenv()
    setup_logging(args.verbose)

    ok = asyncio.run(render(args.country, args.variant, args.output))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
