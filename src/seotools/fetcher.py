"""Remote document fetcher.

Two modes:

- ``proxy``: goes through a CORS-proxy endpoint that wraps the target body in
  JSON (``contents`` plus optional ``status`` metadata).
- ``direct``: plain GET with a chosen user agent, needed when the caller
  must control how the request identifies itself.

Every failure surfaces as a single FetchError; there are no retries.
"""

import logging
import time
from typing import Optional
from urllib.parse import urlparse

import requests

from seotools.config import settings
from seotools.exceptions import FetchError
from seotools.models import FetchResult

logger = logging.getLogger(__name__)


class PageFetcher:
    """Fetches pages, feeds and robots.txt files for the analyzers."""

    MODES = ("proxy", "direct")

    def __init__(
        self,
        mode: str = "proxy",
        proxy_url: Optional[str] = None,
        timeout: Optional[int] = None,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the fetcher.

        Args:
            mode: 'proxy' or 'direct'
            proxy_url: Proxy endpoint (defaults to settings.PROXY_URL)
            timeout: Request timeout in seconds (defaults to settings.TIMEOUT)
            user_agent: Default user agent for direct requests
            session: Optional preconfigured requests session
        """
        if mode not in self.MODES:
            raise ValueError(f"Unknown fetch mode: {mode!r}")
        self.mode = mode
        self.proxy_url = proxy_url or settings.PROXY_URL
        self.timeout = timeout or settings.TIMEOUT
        self.user_agent = user_agent or settings.USER_AGENT
        self.session = session or requests.Session()

    def fetch(self, url: str, user_agent: Optional[str] = None) -> FetchResult:
        """Fetch ``url`` and return its body.

        Args:
            url: Absolute http(s) URL
            user_agent: Overrides the default user agent (direct mode only)

        Raises:
            FetchError: On invalid URL, network error, timeout or non-2xx status
        """
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise FetchError(url, "URL must be absolute http(s)")

        if user_agent and self.mode == "proxy":
            logger.warning("User agent override is ignored in proxy mode")

        logger.info(f"Fetching {url} ({self.mode})")
        start_time = time.time()
        try:
            if self.mode == "proxy":
                result = self._fetch_via_proxy(url)
            else:
                result = self._fetch_direct(url, user_agent or self.user_agent)
        except requests.exceptions.Timeout:
            logger.error(f"Timeout fetching {url}")
            raise FetchError(url, f"Request timeout after {self.timeout}s")
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"HTTP error fetching {url}: {e}")
            raise FetchError(url, str(e), status_code=status)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching {url}: {e}")
            raise FetchError(url, f"Connection error: {e}")

        result.elapsed_ms = int((time.time() - start_time) * 1000)
        return result

    def _fetch_direct(self, url: str, user_agent: str) -> FetchResult:
        response = self.session.get(
            url,
            headers={"User-Agent": user_agent},
            timeout=self.timeout,
            allow_redirects=True,
        )
        response.raise_for_status()
        return FetchResult(
            url=url,
            content=response.text,
            status_code=response.status_code,
            headers=dict(response.headers),
        )

    def _fetch_via_proxy(self, url: str) -> FetchResult:
        response = self.session.get(
            self.proxy_url,
            params={"url": url},
            timeout=self.timeout,
        )
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError:
            raise FetchError(url, "Proxy returned a non-JSON response")

        status = data.get("status") or {}
        status_code = status.get("http_code") or 200
        if status_code >= 400:
            raise FetchError(url, f"Target responded with HTTP {status_code}", status_code=status_code)

        contents = data.get("contents")
        if contents is None:
            raise FetchError(url, "Proxy response has no contents")

        return FetchResult(
            url=url,
            content=contents,
            status_code=status_code,
            headers=status.get("response_headers") or {},
        )


def robots_url(url: str) -> str:
    """robots.txt location for the origin of ``url``."""
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}/robots.txt"
