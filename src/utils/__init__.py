"""Utility modules for the SEO dashboard."""

from .config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
