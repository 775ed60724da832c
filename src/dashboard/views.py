"""
Derived Dashboard Views

Filters a Dataset down to what one selection shows. Pure functions: the
dataset is never modified and the same inputs give the same view.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from src.models import (
    Competitor,
    Dataset,
    DomainInfo,
    KeywordTypeShare,
    LongTailKeyword,
    Selection,
)


@dataclass(frozen=True)
class DashboardView:
    """Read-only slices of the dataset for one selection."""
    selection: Selection
    domain_info: Optional[DomainInfo] = None
    brand_keywords: Tuple[KeywordTypeShare, ...] = ()
    non_brand_keywords: Tuple[KeywordTypeShare, ...] = ()
    long_tail_keywords: Tuple[LongTailKeyword, ...] = ()
    competitors: Tuple[Competitor, ...] = ()

    @property
    def composite_key(self) -> str:
        return self.selection.composite_key

    @property
    def is_empty(self) -> bool:
        return (
            self.domain_info is None
            and not self.brand_keywords
            and not self.non_brand_keywords
            and not self.long_tail_keywords
            and not self.competitors
        )


def derive_view(dataset: Optional[Dataset], selection: Selection) -> DashboardView:
    """
    Build the view for a selection.

    Domain info, keyword types and long-tail keywords match on the
    composite key; competitors match on the bare country code.
    """
    if dataset is None:
        return DashboardView(selection=selection)

    key = selection.composite_key
    country_code = selection.country_code.upper()

    return DashboardView(
        selection=selection,
        domain_info=next((d for d in dataset.domain_info if d.country_code == key), None),
        brand_keywords=tuple(k for k in dataset.keyword_types_brand if k.country_code == key),
        non_brand_keywords=tuple(
            k for k in dataset.keyword_types_non_brand if k.country_code == key
        ),
        long_tail_keywords=tuple(
            k for k in dataset.long_tail_keywords if k.country_code == key
        ),
        competitors=tuple(c for c in dataset.competitors if c.country_code == country_code),
    )
