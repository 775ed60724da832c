"""
SEO Dashboard - Dashboard State

- DashboardController: selection, cached loading, supersede handling
- Paginator: table page arithmetic
- derive_view / DashboardView: per-selection slices of the dataset
"""

from .controller import DashboardController, LoadStatus
from .pagination import PAGE_SIZE_OPTIONS, Paginator
from .views import DashboardView, derive_view

__all__ = [
    "DashboardController",
    "LoadStatus",
    "PAGE_SIZE_OPTIONS",
    "Paginator",
    "DashboardView",
    "derive_view",
]
