"""
Row Normalization

Turns raw sheet rows into dataset records:
- Field names: camelCase / snake_case / acronyms ("CPC") -> snake_case
- Numbers: missing, blank or unparsable values become 0
- Keyword types: colour lookup and percent scale normalization (0-100)

Nothing here validates rows. Absent fields surface as zero/blank.
"""

import logging
import re
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Tuple

from src.models import (
    Competitor,
    DomainInfo,
    KeywordTypeShare,
    LongTailKeyword,
)

logger = logging.getLogger(__name__)


KEYWORD_TYPE_COLORS = {
    "Informational": "#061ab1",
    "Commercial": "#4d5fc7",
    "Transactional": "#F59E0B",
    "Navigational": "#94a3b8",
}
DEFAULT_KEYWORD_TYPE_COLOR = "#666666"

# A key is on a 0-1 scale when every percent is at most 1 and the sum is
# at most this (rounded fractions such as 0.34 + 0.33 + 0.34 exceed 1)
_FRACTION_SUM_LIMIT = 1.05

# lower->Upper ("avgDifficulty") and acronym->Word ("KWOpportunities")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def to_snake_case(name: str) -> str:
    """
    Convert a field name to snake_case.

    >>> to_snake_case("avgDifficultyNonBrand")
    'avg_difficulty_non_brand'
    >>> to_snake_case("CPC")
    'cpc'
    >>> to_snake_case("nbBigKWOpportunities")
    'nb_big_kw_opportunities'
    """
    name = name.strip().replace("-", "_").replace(" ", "_")
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def normalize_keys(row: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of row with snake_case keys."""
    return {to_snake_case(str(key)): value for key, value in row.items()}


def to_float(value: Any) -> float:
    """Coerce a sheet cell to float, 0.0 when missing or unparsable."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip().replace(",", "").rstrip("%").strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def to_int(value: Any) -> int:
    return int(round(to_float(value)))


def to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def color_for(name: str) -> str:
    """Fixed colour for a keyword-type category."""
    return KEYWORD_TYPE_COLORS.get(name, DEFAULT_KEYWORD_TYPE_COLOR)


# ============================================================================
# ROW BUILDERS
# ============================================================================

def build_domain_info(row: Dict[str, Any]) -> DomainInfo:
    r = normalize_keys(row)
    return DomainInfo(
        country_code=to_text(r.get("country_code")),
        country_name=to_text(r.get("country_name")),
        domain_name=to_text(r.get("domain_name")),
        total_keywords=to_int(r.get("total_keywords")),
        total_keywords_brand=to_int(r.get("total_keywords_brand")),
        total_keywords_non_brand=to_int(r.get("total_keywords_non_brand")),
        avg_difficulty_brand=to_float(r.get("avg_difficulty_brand")),
        avg_difficulty_non_brand=to_float(r.get("avg_difficulty_non_brand")),
        nb_big_kw_opportunities=to_int(r.get("nb_big_kw_opportunities")),
    )


def build_keyword_types(rows: Iterable[Dict[str, Any]], resource: str = "") -> List[KeywordTypeShare]:
    """
    Build keyword-type shares, normalizing percents to a 0-100 scale.

    Rows are grouped by composite key. A group where no percent exceeds 1
    and the sum is about 1 (rounding allowed) is taken to be expressed as
    fractions and is scaled by 100.
    Row order is preserved.
    """
    parsed: List[Tuple[str, str, float]] = []
    totals: Dict[str, float] = defaultdict(float)
    largest: Dict[str, float] = defaultdict(float)

    for row in rows:
        r = normalize_keys(row)
        key = to_text(r.get("country_code"))
        percent = to_float(r.get("percent"))
        parsed.append((key, to_text(r.get("name")), percent))
        if percent > 0:
            totals[key] += percent
            largest[key] = max(largest[key], percent)

    fractional = {
        key for key, total in totals.items()
        if 0 < total <= _FRACTION_SUM_LIMIT and largest[key] <= 1.0
    }
    if fractional:
        logger.info(
            f"{resource or 'keyword types'}: scaling fractional percents to 0-100 "
            f"for {sorted(fractional)}"
        )

    return [
        KeywordTypeShare(
            country_code=key,
            name=name,
            percent=percent * 100 if key in fractional else percent,
            color=color_for(name),
        )
        for key, name, percent in parsed
    ]


def build_long_tail_keyword(row: Dict[str, Any]) -> LongTailKeyword:
    r = normalize_keys(row)
    return LongTailKeyword(
        country_code=to_text(r.get("country_code")),
        keyword=to_text(r.get("keyword")),
        tag=to_text(r.get("tag")),
        position=to_int(r.get("position")),
        volume=to_int(r.get("volume")),
        difficulty=to_float(r.get("difficulty")),
        traffic=to_float(r.get("traffic")),
        cpc=to_float(r.get("cpc")),
        position_type=to_text(r.get("position_type")),
        intent=to_text(r.get("intent")),
    )


def build_competitor(row: Dict[str, Any]) -> Competitor:
    r = normalize_keys(row)
    return Competitor(
        country_code=to_text(r.get("country_code")),
        country_name=to_text(r.get("country_name")),
        domain=to_text(r.get("domain")),
        competitor_relevance=to_float(r.get("competitor_relevance")),
        common_keywords=to_int(r.get("common_keywords")),
        organic_keywords=to_int(r.get("organic_keywords")),
        organic_traffic=to_float(r.get("organic_traffic")),
        organic_cost=to_float(r.get("organic_cost")),
        google_ads_keywords=to_int(r.get("google_ads_keywords")),
    )
