"""
SEO Dashboard - Data Models

Immutable value records for the dashboard dataset and the static
country reference data used to build selection keys.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Tuple


# =============================================================================
# ENUMS
# =============================================================================


class LanguageVariant(str, Enum):
    """Language view of a country's data."""
    NATIVE = "native"
    ENGLISH = "english"

    @property
    def toggled(self) -> "LanguageVariant":
        if self is LanguageVariant.NATIVE:
            return LanguageVariant.ENGLISH
        return LanguageVariant.NATIVE


# =============================================================================
# REFERENCE DATA
# =============================================================================


@dataclass(frozen=True)
class Country:
    """Static country entry with its two composite keys."""
    code: str
    name: str
    native: str
    english: str

    def key_for(self, variant: LanguageVariant) -> str:
        return self.native if variant is LanguageVariant.NATIVE else self.english


def _country(code: str, name: str) -> Country:
    return Country(code=code, name=name, native=f"{code}-{code}", english=f"{code}-EN")


COUNTRIES: Tuple[Country, ...] = (
    _country("PL", "Poland"),
    _country("ES", "Spain"),
    _country("FR", "France"),
    _country("DE", "Germany"),
    _country("NL", "Netherlands"),
)

COUNTRIES_BY_CODE: Dict[str, Country] = {c.code: c for c in COUNTRIES}


def get_country(code: str) -> Optional[Country]:
    """Look up a country by code (case-insensitive)."""
    return COUNTRIES_BY_CODE.get((code or "").upper())


@dataclass(frozen=True)
class Selection:
    """Current country + language variant."""
    country_code: str = "PL"
    variant: LanguageVariant = LanguageVariant.NATIVE

    @property
    def country(self) -> Optional[Country]:
        return get_country(self.country_code)

    @property
    def composite_key(self) -> str:
        """Join key for domain info, keyword types and long-tail rows."""
        code = self.country_code.upper()
        if self.variant is LanguageVariant.NATIVE:
            return f"{code}-{code}"
        return f"{code}-EN"


# =============================================================================
# DATASET ROWS
# =============================================================================


@dataclass(frozen=True)
class DomainInfo:
    """Domain summary for one composite key."""
    country_code: str
    country_name: str = ""
    domain_name: str = ""
    total_keywords: int = 0
    total_keywords_brand: int = 0
    total_keywords_non_brand: int = 0
    avg_difficulty_brand: float = 0.0
    avg_difficulty_non_brand: float = 0.0
    nb_big_kw_opportunities: int = 0

    @property
    def brand_share(self) -> float:
        """Brand keywords as a percentage of all keywords."""
        if self.total_keywords <= 0:
            return 0.0
        return self.total_keywords_brand / self.total_keywords * 100

    @property
    def non_brand_share(self) -> float:
        if self.total_keywords <= 0:
            return 0.0
        return self.total_keywords_non_brand / self.total_keywords * 100


@dataclass(frozen=True)
class KeywordTypeShare:
    """Share of one search-intent category (percent on a 0-100 scale)."""
    country_code: str
    name: str
    percent: float
    color: str


@dataclass(frozen=True)
class LongTailKeyword:
    """A tracked long-tail keyword."""
    country_code: str
    keyword: str
    tag: str = ""
    position: int = 0
    volume: int = 0
    difficulty: float = 0.0
    traffic: float = 0.0
    cpc: float = 0.0
    position_type: str = ""
    intent: str = ""


@dataclass(frozen=True)
class Competitor:
    """A competing domain in one country (keyed by bare country code)."""
    country_code: str
    domain: str
    country_name: str = ""
    competitor_relevance: float = 0.0  # 0-1
    common_keywords: int = 0
    organic_keywords: int = 0
    organic_traffic: float = 0.0
    organic_cost: float = 0.0
    google_ads_keywords: int = 0


@dataclass(frozen=True)
class Dataset:
    """Everything the dashboard shows, fetched as one unit."""
    domain_info: Tuple[DomainInfo, ...] = ()
    keyword_types_brand: Tuple[KeywordTypeShare, ...] = ()
    keyword_types_non_brand: Tuple[KeywordTypeShare, ...] = ()
    long_tail_keywords: Tuple[LongTailKeyword, ...] = ()
    competitors: Tuple[Competitor, ...] = ()
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def row_counts(self) -> Dict[str, int]:
        return {
            "domainInfo": len(self.domain_info),
            "keywordTypesBrand": len(self.keyword_types_brand),
            "keywordTypesNonBrand": len(self.keyword_types_non_brand),
            "longTailKeywords": len(self.long_tail_keywords),
            "competitors": len(self.competitors),
        }


__all__ = [
    "LanguageVariant",
    "Country",
    "COUNTRIES",
    "COUNTRIES_BY_CODE",
    "get_country",
    "Selection",
    "DomainInfo",
    "KeywordTypeShare",
    "LongTailKeyword",
    "Competitor",
    "Dataset",
]
