"""Pre-rendering test.

Checks whether the HTML a crawler receives already carries the page's
content and head metadata, or whether it is an empty shell that relies on
client-side JavaScript.
"""

from dataclasses import dataclass
from typing import List, Optional

from seotools.config import AnalysisThresholds, default_thresholds
from seotools.constants import SPA_ROOT_MARKERS
from seotools.document import ParsedDocument


@dataclass
class PrerenderCheck:
    check: str
    status: str  # pass/warning/fail
    details: str


def check(html: str, thresholds: Optional[AnalysisThresholds] = None) -> List[PrerenderCheck]:
    """Run the pre-rendering checks over raw (unrendered) HTML."""
    thresholds = thresholds or default_thresholds
    html = html or ""
    document = ParsedDocument(html)
    body_text = document.body_text()
    results = []

    has_doctype = "<!doctype html" in html.lower()
    results.append(PrerenderCheck(
        "HTML Doctype",
        "pass" if has_doctype else "fail",
        "Valid HTML5 doctype found" if has_doctype else "Missing or invalid doctype",
    ))

    title = document.title
    results.append(PrerenderCheck(
        "Title Tag",
        "pass" if title else "fail",
        f'Title: "{title[:60]}"' if title else "No title tag found",
    ))

    has_description = document.has('meta', name='description')
    results.append(PrerenderCheck(
        "Meta Description",
        "pass" if has_description else "warning",
        "Meta description present" if has_description else "No meta description found",
    ))

    has_content = len(body_text) > thresholds.rendered_content_min
    results.append(PrerenderCheck(
        "Rendered Content",
        "pass" if has_content else "warning",
        f"{len(body_text)} characters of text content found" if has_content
        else "Limited text content - may be JavaScript-rendered",
    ))

    has_noscript = "<noscript" in html
    results.append(PrerenderCheck(
        "Noscript Fallback",
        "pass" if has_noscript else "warning",
        "Noscript tag present for JS-disabled users" if has_noscript
        else "No noscript fallback - content may not be accessible without JS",
    ))

    is_spa = any(marker in html for marker in SPA_ROOT_MARKERS)
    has_server_content = "Loading..." not in html and len(body_text) > thresholds.prerendered_content_min
    if is_spa:
        details = ("SPA detected with pre-rendered content" if has_server_content
                   else "SPA detected - may rely on client-side rendering")
    else:
        details = "Static or server-rendered content"
    results.append(PrerenderCheck(
        "Pre-rendering Detection",
        "warning" if is_spa and not has_server_content else "pass",
        details,
    ))

    robots = document.meta_content('robots')
    results.append(PrerenderCheck(
        "Meta Robots",
        "warning" if "noindex" in robots.lower() else "pass",
        f"Robots meta: {robots}" if robots else "No robots meta tag (defaults to index, follow)",
    ))

    canonical = document.first('link', rel='canonical')
    results.append(PrerenderCheck(
        "Canonical URL",
        "pass" if canonical is not None else "warning",
        f"Canonical: {canonical.get('href', '')}" if canonical is not None else "No canonical URL specified",
    ))

    has_open_graph = document.has('meta', property='og:title')
    results.append(PrerenderCheck(
        "Open Graph Tags",
        "pass" if has_open_graph else "warning",
        "Open Graph tags present" if has_open_graph else "Missing Open Graph tags",
    ))

    return results
