"""Utility helpers for URL handling and logging."""

from readme_crawler.utils.url import is_ignored, resolve_url, url_extension
from readme_crawler.utils.log import setup_logging, log

__all__ = [
    "is_ignored",
    "resolve_url",
    "url_extension",
    "setup_logging",
    "log",
]
