"""Hreflang annotation validator."""

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import List
from urllib.parse import urlparse

from seotools.constants import HREFLANG_CODE_PATTERN, X_DEFAULT
from seotools.document import ParsedDocument
from seotools.models import HreflangEntry, ValidationResult

logger = logging.getLogger(__name__)

CODE_RE = re.compile(HREFLANG_CODE_PATTERN, re.IGNORECASE)


@dataclass
class HreflangReport:
    """Extracted hreflang entries and the validation messages for them."""

    entries: List[HreflangEntry] = field(default_factory=list)
    results: List[ValidationResult] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationResult]:
        return [r for r in self.results if r.severity == 'error']

    @property
    def warnings(self) -> List[ValidationResult]:
        return [r for r in self.results if r.severity == 'warning']

    @property
    def is_valid(self) -> bool:
        return not self.errors


def extract_entries(markup: str) -> List[HreflangEntry]:
    """Find <link rel="alternate" hreflang=".." href=".."> tags in any attribute order."""
    document = ParsedDocument(markup)
    return [
        HreflangEntry(language_code=link.get('hreflang', ''), href=link.get('href', ''))
        for link in document.find_all('link', rel='alternate', hreflang=True, href=True)
    ]


def _url_scheme(href: str) -> str:
    """Scheme of an absolute URL, or an empty string if ``href`` is not one."""
    try:
        parsed = urlparse(href.strip())
    except ValueError:
        return ""
    if not parsed.scheme or not (parsed.netloc or parsed.path):
        return ""
    if parsed.scheme in ('http', 'https') and not parsed.netloc:
        return ""
    return parsed.scheme.lower()


class HreflangValidator:
    """Checks a set of hreflang annotations for common mistakes."""

    def validate(self, markup: str) -> HreflangReport:
        entries = extract_entries(markup)
        report = HreflangReport(entries=entries)
        results = report.results

        # Presence
        if not entries:
            results.append(ValidationResult('error', "No valid hreflang tags found in the input."))
        else:
            results.append(ValidationResult('success', f"Found {len(entries)} hreflang tag(s)."))

        # x-default
        if any(entry.language_code.lower() == X_DEFAULT for entry in entries):
            results.append(ValidationResult('success', "x-default tag found."))
        else:
            results.append(ValidationResult(
                'warning',
                "Missing x-default tag. Recommended for specifying the default/fallback page.",
            ))

        # Code format
        for entry in entries:
            code = entry.language_code
            if code.lower() != X_DEFAULT and not CODE_RE.match(code):
                results.append(ValidationResult(
                    'error',
                    f'Invalid language code: "{code}". Use ISO 639-1 format.',
                ))

        # Duplicates
        counts = Counter(entry.language_code.lower() for entry in entries)
        duplicates = [code for code, count in counts.items() if count > 1]
        if duplicates:
            results.append(ValidationResult(
                'error',
                f"Duplicate language codes found: {', '.join(duplicates)}",
            ))
        elif entries:
            results.append(ValidationResult('success', "No duplicate language codes."))

        # URLs
        schemes = set()
        invalid_urls = 0
        for entry in entries:
            scheme = _url_scheme(entry.href)
            if not scheme:
                invalid_urls += 1
                results.append(ValidationResult(
                    'error',
                    f'Invalid URL for {entry.language_code}: "{entry.href}"',
                ))
            else:
                schemes.add(scheme)
        if entries and not invalid_urls:
            results.append(ValidationResult('success', "All URLs are valid."))

        if {'http', 'https'} <= schemes:
            results.append(ValidationResult(
                'warning',
                "Mixed protocols detected (http/https). Use consistent HTTPS.",
            ))

        logger.debug(
            f"Validated {len(entries)} hreflang entries: "
            f"{len(report.errors)} errors, {len(report.warnings)} warnings"
        )
        return report


def validate(markup: str) -> HreflangReport:
    """Extract and validate hreflang annotations from markup."""
    return HreflangValidator().validate(markup)
