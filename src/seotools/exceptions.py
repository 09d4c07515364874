"""Exceptions raised by the SEO toolbox.

Analyzers never raise for malformed input; they report it as data. Only the
fetch boundary raises.
"""

from typing import Optional


class SeoToolsError(Exception):
    """Base class for toolbox errors."""


class FetchError(SeoToolsError):
    """Raised when a remote page, feed or robots.txt could not be fetched."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Failed to fetch {url}: {message}")
