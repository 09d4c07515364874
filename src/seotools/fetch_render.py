"""Fetch & render snapshot: what a crawler sees on first load."""

from dataclasses import dataclass, field
from typing import Dict, List

from seotools.constants import SNAPSHOT_LINK_TEXT_CHARS, SNAPSHOT_SAMPLE_LIMIT
from seotools.document import ParsedDocument
from seotools.models import FetchResult


@dataclass
class LinkSample:
    href: str
    text: str


@dataclass
class ImageSample:
    src: str
    alt: str


@dataclass
class RenderSnapshot:
    """Head metadata and a sample of links and images of a fetched page."""

    url: str
    status_code: int
    load_time_ms: int
    title: str = ""
    meta_description: str = ""
    h1_tags: List[str] = field(default_factory=list)
    links: List[LinkSample] = field(default_factory=list)
    images: List[ImageSample] = field(default_factory=list)
    headers: Dict[str, str] = field(default_factory=dict)
    html_length: int = 0


def snapshot(page: FetchResult) -> RenderSnapshot:
    document = ParsedDocument(page.content)

    links = [
        LinkSample(
            href=anchor.get('href', ''),
            text=anchor.get_text().strip()[:SNAPSHOT_LINK_TEXT_CHARS],
        )
        for anchor in document.find_all('a', href=True)[:SNAPSHOT_SAMPLE_LIMIT]
    ]
    images = [
        ImageSample(src=image.get('src', ''), alt=image.get('alt', ''))
        for image in document.find_all('img')[:SNAPSHOT_SAMPLE_LIMIT]
    ]

    return RenderSnapshot(
        url=page.url,
        status_code=page.status_code,
        load_time_ms=page.elapsed_ms,
        title=document.title,
        meta_description=document.meta_content('description'),
        h1_tags=[h1.get_text() for h1 in document.find_all('h1')],
        links=links,
        images=images,
        headers=dict(page.headers),
        html_length=len(page.content),
    )
