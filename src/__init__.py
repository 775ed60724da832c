"""
Multi-Country SEO Dashboard

A reporting dashboard that:
1. Fetches pre-aggregated SEO metrics from a read-only spreadsheet API
2. Filters them by country and language variant
3. Renders overview cards, keyword-type pie charts and paginated tables
"""

__version__ = "0.1.0"
