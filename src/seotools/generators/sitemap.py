"""XML sitemap generator with optional hreflang alternates."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, List
from xml.sax.saxutils import escape, quoteattr

from seotools.constants import SITEMAP_NAMESPACE, XHTML_NAMESPACE


class ChangeFrequency(str, Enum):
    """Allowed <changefreq> values."""

    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


@dataclass
class AlternateLink:
    lang: str
    url: str


@dataclass
class SitemapUrlEntry:
    """One <url> of the sitemap."""

    location: str
    last_modified: date = field(default_factory=date.today)
    change_frequency: ChangeFrequency = ChangeFrequency.WEEKLY
    priority: float = 0.8
    alternates: List[AlternateLink] = field(default_factory=list)

    def __post_init__(self):
        self.change_frequency = ChangeFrequency(self.change_frequency)
        if not 0.0 <= float(self.priority) <= 1.0:
            raise ValueError(f"priority must be between 0.0 and 1.0, got {self.priority}")


def generate_sitemap(entries: Iterable[SitemapUrlEntry], include_hreflang: bool = False) -> str:
    """Render a sitemap. Entries with an empty location are skipped."""
    namespaces = f'xmlns="{SITEMAP_NAMESPACE}"'
    if include_hreflang:
        namespaces += f'\n       xmlns:xhtml="{XHTML_NAMESPACE}"'

    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>\n',
        f'<urlset {namespaces}>\n',
    ]

    for entry in entries:
        if not entry.location.strip():
            continue

        parts.append(
            '  <url>\n'
            f'    <loc>{escape(entry.location.strip())}</loc>\n'
            f'    <lastmod>{entry.last_modified.isoformat()}</lastmod>\n'
            f'    <changefreq>{entry.change_frequency.value}</changefreq>\n'
            f'    <priority>{float(entry.priority)}</priority>\n'
        )

        if include_hreflang:
            for alternate in entry.alternates:
                if not alternate.url:
                    continue
                parts.append(
                    f'    <xhtml:link rel="alternate" hreflang={quoteattr(alternate.lang)} '
                    f'href={quoteattr(alternate.url)}/>\n'
                )

        parts.append('  </url>\n')

    parts.append('</urlset>')
    return ''.join(parts)
