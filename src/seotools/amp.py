"""AMP compliance checker.

Runs a fixed battery of structural checks over the raw HTML text with
substring and regex tests. It is a quick pre-flight, not the official AMP
validator: it does not build a DOM and will both miss and over-report some
problems.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, List, Tuple

from seotools.constants import AMP_ALLOWED_SCRIPT_TYPES, AMP_CDN_HOST, AMP_RUNTIME_URL
from seotools.models import ComplianceCheck

logger = logging.getLogger(__name__)


DOCTYPE_RE = re.compile(r'<!doctype\s+html', re.IGNORECASE)
AMP_HTML_RE = re.compile(r'<html\b[^>]*?\s(?:⚡|amp)(?=[\s>=/])', re.IGNORECASE)
CHARSET_RE = re.compile(r'<meta\s[^>]*charset\s*=', re.IGNORECASE)
VIEWPORT_RE = re.compile(r'name\s*=\s*["\']viewport["\']', re.IGNORECASE)
BOILERPLATE_RE = re.compile(r'<style\s[^>]*amp-boilerplate', re.IGNORECASE)
SCRIPT_TAG_RE = re.compile(r'<script\b([^>]*)>', re.IGNORECASE)
SCRIPT_TYPE_RE = re.compile(r'\btype\s*=\s*["\']([^"\']+)["\']', re.IGNORECASE)
SCRIPT_SRC_RE = re.compile(r'\bsrc\s*=\s*["\']([^"\']+)["\']', re.IGNORECASE)
NOSCRIPT_RE = re.compile(r'<noscript\b.*?</noscript>', re.IGNORECASE | re.DOTALL)
INLINE_STYLE_RE = re.compile(r'<[a-z][^>]*\sstyle\s*=', re.IGNORECASE)
FORM_RE = re.compile(r'<form\b', re.IGNORECASE)
AMP_FORM_RE = re.compile(r'custom-element\s*=\s*["\']amp-form["\']', re.IGNORECASE)
CANONICAL_RE = re.compile(r'rel\s*=\s*["\']canonical["\']', re.IGNORECASE)


def _tag_re(name: str) -> re.Pattern:
    return re.compile(rf'<{name}[\s>/]', re.IGNORECASE)


IMG_RE = _tag_re('img')
VIDEO_RE = _tag_re('video')
IFRAME_RE = _tag_re('iframe')


@dataclass
class AmpReport:
    """All checks in battery order; valid unless an error-severity check failed."""

    checks: List[ComplianceCheck] = field(default_factory=list)

    @property
    def failures(self) -> List[ComplianceCheck]:
        return [c for c in self.checks if not c.passed]

    @property
    def error_count(self) -> int:
        return sum(1 for c in self.failures if c.severity == 'error')

    @property
    def warning_count(self) -> int:
        return sum(1 for c in self.failures if c.severity == 'warning')

    @property
    def is_valid(self) -> bool:
        return self.error_count == 0


def _without_noscript(html: str) -> str:
    return NOSCRIPT_RE.sub('', html)


def _has_custom_script(html: str) -> bool:
    """True when a <script> is neither an AMP CDN script nor inline data."""
    for match in SCRIPT_TAG_RE.finditer(html):
        attributes = match.group(1)
        src = SCRIPT_SRC_RE.search(attributes)
        if src and AMP_CDN_HOST in src.group(1):
            continue
        script_type = SCRIPT_TYPE_RE.search(attributes)
        if not src and script_type and script_type.group(1).lower() in AMP_ALLOWED_SCRIPT_TYPES:
            continue
        return True
    return False


# (rule name, severity, failure message, predicate that is True when the rule passes)
CheckDefinition = Tuple[str, str, str, Callable[[str], bool]]

CHECKS: List[CheckDefinition] = [
    (
        'doctype', 'error',
        "Missing or invalid doctype. Use <!doctype html>",
        lambda html: bool(DOCTYPE_RE.search(html)),
    ),
    (
        'amp_html_attribute', 'error',
        "Missing AMP attribute on html tag. Use <html ⚡> or <html amp>",
        lambda html: bool(AMP_HTML_RE.search(html)),
    ),
    (
        'charset', 'error',
        'Missing charset meta tag. Add <meta charset="utf-8">',
        lambda html: bool(CHARSET_RE.search(html)),
    ),
    (
        'viewport', 'error',
        "Missing viewport meta tag",
        lambda html: bool(VIEWPORT_RE.search(html)),
    ),
    (
        'amp_runtime', 'error',
        "Missing AMP runtime script",
        lambda html: AMP_RUNTIME_URL in html,
    ),
    (
        'amp_boilerplate', 'error',
        "Missing AMP boilerplate style",
        lambda html: bool(BOILERPLATE_RE.search(html)),
    ),
    (
        'custom_javascript', 'error',
        "Custom JavaScript is not allowed in AMP pages",
        lambda html: not _has_custom_script(html),
    ),
    (
        'amp_img', 'error',
        "Use <amp-img> instead of <img>",
        lambda html: not IMG_RE.search(_without_noscript(html)),
    ),
    (
        'amp_video', 'warning',
        "Use <amp-video> instead of <video>",
        lambda html: not VIDEO_RE.search(_without_noscript(html)),
    ),
    (
        'amp_iframe', 'error',
        "Use <amp-iframe> instead of <iframe>",
        lambda html: not IFRAME_RE.search(_without_noscript(html)),
    ),
    (
        'inline_styles', 'warning',
        "Inline styles are restricted in AMP. Use <style amp-custom>",
        lambda html: not INLINE_STYLE_RE.search(html),
    ),
    (
        'amp_form', 'warning',
        "Use amp-form component for forms",
        lambda html: not FORM_RE.search(html) or bool(AMP_FORM_RE.search(html)),
    ),
    (
        'canonical', 'error',
        "Missing canonical link",
        lambda html: bool(CANONICAL_RE.search(html)),
    ),
]


class AmpValidator:
    """Runs the AMP check battery."""

    def check(self, html: str) -> AmpReport:
        html = html or ""
        report = AmpReport()

        for rule_name, severity, message, predicate in CHECKS:
            passed = predicate(html)
            report.checks.append(ComplianceCheck(
                rule_name=rule_name,
                severity=severity,
                passed=passed,
                message="OK" if passed else message,
            ))

        logger.debug(
            f"AMP check: {report.error_count} errors, {report.warning_count} warnings"
        )
        return report


def check(html: str) -> AmpReport:
    """Check HTML against the AMP structural rules."""
    return AmpValidator().check(html)
