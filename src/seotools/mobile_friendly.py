"""Bulk mobile-friendliness test.

Each page is scanned for a handful of markup patterns that commonly break
small-screen rendering. The status follows the number of issues found:
none is a pass, a couple is a warning, more is a failure.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from seotools.config import AnalysisThresholds, default_thresholds
from seotools.document import ParsedDocument
from seotools.exceptions import FetchError
from seotools.fetcher import PageFetcher

logger = logging.getLogger(__name__)


ISSUE_NO_VIEWPORT = "Missing viewport meta tag"
ISSUE_UNRESPONSIVE_IMAGES = "Images may not be responsive"
ISSUE_SMALL_FONTS = "Small font sizes detected"
ISSUE_FIXED_WIDTH = "Fixed width elements may cause horizontal scrolling"
ISSUE_PLUGINS = "Flash or plugin content detected"
ISSUE_FETCH_FAILED = "Failed to fetch URL"

SMALL_FONT_MARKERS = [
    f"font-size:{space}{size}px" for size in (8, 9, 10) for space in ("", " ")
]
FIXED_WIDTH_MARKERS = [
    f"width:{space}{size}px" for size in (980, 1024) for space in ("", " ")
]
RESPONSIVE_MARKERS = ["max-width: 100%", "max-width:100%"]
PLUGIN_MARKERS = ["<embed", "<object"]


@dataclass
class MobileFriendlyResult:
    url: str
    status: str  # pass/warning/fail/error
    issues: List[str] = field(default_factory=list)


def _contains_any(text: str, markers: Iterable[str]) -> bool:
    return any(marker in text for marker in markers)


def find_issues(html: str) -> List[str]:
    """List the mobile usability issues found in ``html``."""
    document = ParsedDocument(html)
    lowered = (html or "").lower()
    issues = []

    if not document.has('meta', name='viewport'):
        issues.append(ISSUE_NO_VIEWPORT)

    images = document.find_all('img')
    if images:
        responsive = _contains_any(lowered, RESPONSIVE_MARKERS) or any(
            image.get('srcset') for image in images
        )
        if not responsive:
            issues.append(ISSUE_UNRESPONSIVE_IMAGES)

    if _contains_any(lowered, SMALL_FONT_MARKERS):
        issues.append(ISSUE_SMALL_FONTS)

    if _contains_any(lowered, FIXED_WIDTH_MARKERS):
        issues.append(ISSUE_FIXED_WIDTH)

    if _contains_any(lowered, PLUGIN_MARKERS):
        issues.append(ISSUE_PLUGINS)

    return issues


def evaluate_page(
    url: str,
    html: str,
    thresholds: Optional[AnalysisThresholds] = None,
) -> MobileFriendlyResult:
    thresholds = thresholds or default_thresholds
    issues = find_issues(html)

    if not issues:
        status = "pass"
    elif len(issues) <= thresholds.mobile_friendly_warning_max_issues:
        status = "warning"
    else:
        status = "fail"

    return MobileFriendlyResult(url=url, status=status, issues=issues)


class MobileFriendlyTester:
    """Runs the mobile-friendly check over a list of URLs."""

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        thresholds: Optional[AnalysisThresholds] = None,
    ):
        self.fetcher = fetcher or PageFetcher()
        self.thresholds = thresholds or default_thresholds

    def run(self, urls: Iterable[str]) -> List[MobileFriendlyResult]:
        """Test each URL in turn. A failed fetch is recorded and the run continues."""
        results = []
        for url in urls:
            url = url.strip()
            if not url:
                continue
            try:
                page = self.fetcher.fetch(url)
            except FetchError as e:
                logger.warning(f"Skipping mobile-friendly checks for {url}: {e}")
                results.append(MobileFriendlyResult(url=url, status="error", issues=[ISSUE_FETCH_FAILED]))
                continue
            results.append(evaluate_page(url, page.content, self.thresholds))

        logger.debug(
            f"Mobile-friendly run: {sum(1 for r in results if r.status == 'pass')}"
            f"/{len(results)} passed"
        )
        return results
