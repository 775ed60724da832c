"""
SEO Dashboard - Rendering

- ChartGenerator / pie_slices: inline SVG pie geometry
- DashboardPageBuilder: the dashboard as one HTML document
- formatting: number, currency and colour-band helpers
"""

from .charts import ChartGenerator, PieSlice, pie_slices
from .dashboard import DashboardPageBuilder

__all__ = [
    "ChartGenerator",
    "PieSlice",
    "pie_slices",
    "DashboardPageBuilder",
]
