"""Mobile-first indexing comparator.

Extracts the same on-page signals from a mobile and a desktop rendition of a
page and reports, per signal, whether the mobile version is healthy and on a
par with desktop. Passing the same document twice reduces the comparison to a
single-document signal audit.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from seotools.config import AnalysisThresholds, default_thresholds, settings
from seotools.constants import COMPARISON_TITLE_CHARS, ELLIPSIS
from seotools.document import ParsedDocument
from seotools.fetcher import PageFetcher
from seotools.models import ComparisonResult

logger = logging.getLogger(__name__)


@dataclass
class PageSignals:
    """On-page signals of one rendition."""

    title: str
    has_meta_description: bool
    h1_count: int
    h2_count: int
    link_count: int
    image_count: int
    images_with_alt: int
    text_length: int
    has_viewport: bool
    script_count: int
    stylesheet_count: int

    @property
    def alt_coverage(self) -> float:
        if not self.image_count:
            return 1.0
        return self.images_with_alt / self.image_count


def extract_signals(html: str) -> PageSignals:
    document = ParsedDocument(html)
    return PageSignals(
        title=document.title,
        has_meta_description=bool(document.meta_content('description')),
        h1_count=document.count('h1'),
        h2_count=document.count('h2'),
        link_count=document.count('a'),
        image_count=document.count('img'),
        images_with_alt=document.count('img', alt=True),
        text_length=len(document.body_text()),
        has_viewport=document.has('meta', name='viewport'),
        script_count=document.count('script'),
        stylesheet_count=document.count('link', rel='stylesheet') + document.count('style'),
    )


def _short_title(title: str) -> str:
    if len(title) > COMPARISON_TITLE_CHARS:
        return title[:COMPARISON_TITLE_CHARS] + ELLIPSIS
    return title


def _presence(value: bool) -> str:
    return "Present" if value else "Missing"


class MobileFirstComparator:
    """Compares mobile and desktop signals of a page."""

    def __init__(self, thresholds: Optional[AnalysisThresholds] = None):
        self.thresholds = thresholds or default_thresholds

    def compare(self, html_mobile: str, html_desktop: str) -> List[ComparisonResult]:
        mobile = extract_signals(html_mobile)
        desktop = extract_signals(html_desktop)
        results = [
            self._title_row(mobile, desktop),
            self._meta_description_row(mobile, desktop),
            self._viewport_row(mobile, desktop),
            self._h1_row(mobile, desktop),
            self._count_row("H2 Tags", mobile.h2_count, desktop.h2_count, "Content structure"),
            self._count_row("Internal Links", mobile.link_count, desktop.link_count, "Link count comparison"),
            self._images_row(mobile, desktop),
            self._text_row(mobile, desktop),
            ComparisonResult("Scripts", mobile.script_count, desktop.script_count, "match",
                             "JavaScript resources"),
            ComparisonResult("Stylesheets", mobile.stylesheet_count, desktop.stylesheet_count, "match",
                             "CSS resources"),
        ]
        logger.debug(
            f"Mobile-first comparison: "
            f"{sum(1 for r in results if r.status != 'match')} of {len(results)} rows flagged"
        )
        return results

    def _title_row(self, mobile: PageSignals, desktop: PageSignals) -> ComparisonResult:
        if mobile.title != desktop.title:
            status, note = "mismatch", "Title tags differ between versions"
        else:
            status, note = "match", "Title tags match between versions"
        return ComparisonResult("Title Tag", _short_title(mobile.title), _short_title(desktop.title),
                                status, note)

    def _meta_description_row(self, mobile: PageSignals, desktop: PageSignals) -> ComparisonResult:
        if mobile.has_meta_description != desktop.has_meta_description:
            status, note = "mismatch", "Meta description differs between versions"
        elif mobile.has_meta_description:
            status, note = "match", "Meta description present"
        else:
            status, note = "warning", "Missing meta description"
        return ComparisonResult("Meta Description", _presence(mobile.has_meta_description),
                                _presence(desktop.has_meta_description), status, note)

    def _viewport_row(self, mobile: PageSignals, desktop: PageSignals) -> ComparisonResult:
        # Only the mobile rendition needs a viewport
        if mobile.has_viewport:
            status, note = "match", "Mobile viewport configured"
        else:
            status, note = "mismatch", "Missing viewport meta tag"
        return ComparisonResult("Viewport Meta", _presence(mobile.has_viewport),
                                _presence(desktop.has_viewport), status, note)

    def _h1_row(self, mobile: PageSignals, desktop: PageSignals) -> ComparisonResult:
        if mobile.h1_count != desktop.h1_count:
            status, note = "mismatch", "H1 count differs between versions"
        elif mobile.h1_count == 1:
            status, note = "match", "Single H1 tag (recommended)"
        elif mobile.h1_count == 0:
            status, note = "mismatch", "No H1 found"
        else:
            status, note = "warning", "Multiple H1 tags"
        return ComparisonResult("H1 Tags", mobile.h1_count, desktop.h1_count, status, note)

    @staticmethod
    def _count_row(category: str, mobile: int, desktop: int, note: str) -> ComparisonResult:
        if mobile != desktop:
            return ComparisonResult(category, mobile, desktop, "mismatch",
                                    f"{category} differ: {mobile} mobile vs {desktop} desktop")
        return ComparisonResult(category, mobile, desktop, "match", note)

    def _images_row(self, mobile: PageSignals, desktop: PageSignals) -> ComparisonResult:
        note = f"{mobile.images_with_alt}/{mobile.image_count} images have alt text"
        status = "match" if mobile.image_count == desktop.image_count else "mismatch"
        return ComparisonResult("Images", mobile.image_count, desktop.image_count, status, note)

    def _text_row(self, mobile: PageSignals, desktop: PageSignals) -> ComparisonResult:
        if mobile.text_length < desktop.text_length * self.thresholds.text_parity_ratio:
            status, note = "mismatch", "Mobile version has less text content than desktop"
        elif mobile.text_length > self.thresholds.min_text_length:
            status, note = "match", "Adequate content"
        else:
            status, note = "warning", "Limited text content"
        return ComparisonResult("Text Content", f"{mobile.text_length} chars",
                                f"{desktop.text_length} chars", status, note)


class MobileFirstAnalyzer:
    """Fetches a URL as a phone and as a desktop browser and compares the two."""

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        comparator: Optional[MobileFirstComparator] = None,
    ):
        # Proxy mode cannot forward a user agent, so fetch directly
        self.fetcher = fetcher or PageFetcher(mode="direct")
        self.comparator = comparator or MobileFirstComparator()

    def analyze_url(self, url: str) -> List[ComparisonResult]:
        """Fetch both renditions and compare them.

        Raises:
            FetchError: If either rendition cannot be fetched
        """
        mobile = self.fetcher.fetch(url, user_agent=settings.MOBILE_USER_AGENT)
        desktop = self.fetcher.fetch(url, user_agent=settings.DESKTOP_USER_AGENT)
        return self.comparator.compare(mobile.content, desktop.content)


def compare(html_mobile: str, html_desktop: str) -> List[ComparisonResult]:
    """Compare the signals of a mobile and a desktop rendition."""
    return MobileFirstComparator().compare(html_mobile, html_desktop)
