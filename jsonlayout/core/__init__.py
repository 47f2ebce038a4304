"""Core: settings and root logger setup."""

from jsonlayout.core.config import LayoutSettings, get_settings
from jsonlayout.core.logging import configure_logging

__all__ = [
    "LayoutSettings",
    "configure_logging",
    "get_settings",
]
