"""RSS 2.0 / Atom feed parser and validator.

Well-formedness is checked with ElementTree; extraction runs on a lenient
BeautifulSoup (lxml-xml) tree so a broken feed still yields whatever items
can be recovered alongside the parse error.
"""

import logging
from typing import Iterable, Optional
from xml.etree import ElementTree as ET

from bs4 import BeautifulSoup
from bs4.element import Tag

from seotools.constants import (
    FEED_DESCRIPTION_DISPLAY_CHARS,
    MAX_FEED_ITEMS,
    UNTITLED_FEED,
    UNTITLED_ITEM,
)
from seotools.models import Feed, FeedItem

logger = logging.getLogger(__name__)


def _qualified_names(tag: Tag) -> set:
    names = {tag.name}
    if tag.prefix:
        names.add(f"{tag.prefix}:{tag.name}")
    return names


def _find(element: Tag, names: Iterable[str], recursive: bool = True) -> Optional[Tag]:
    """First element (document order) named any of ``names``."""
    wanted = set(names)
    return element.find(
        lambda tag: bool(_qualified_names(tag) & wanted),
        recursive=recursive,
    )


def _text(element: Optional[Tag]) -> str:
    return element.get_text().strip() if element is not None else ""


def _author(entry: Tag) -> str:
    """Atom authors nest a <name> beside <email> and <uri>; RSS authors are plain text."""
    element = _find(entry, ['author', 'dc:creator'])
    if element is None:
        return ""
    name = _find(element, ['name'], recursive=False)
    if name is not None:
        return _text(name)
    return element.get_text(' ', strip=True)


def _link(element: Optional[Tag]) -> str:
    """Atom links carry the URL in href, RSS links in their text."""
    if element is None:
        return ""
    return (element.get('href') or element.get_text()).strip()


def strip_html(text: str) -> str:
    """Remove markup from an item description, leaving readable text."""
    if '<' not in text:
        return text.strip()
    return BeautifulSoup(text, 'html.parser').get_text(' ', strip=True)


def is_well_formed(xml_text: str) -> bool:
    try:
        ET.fromstring(xml_text)
    except ET.ParseError:
        return False
    return True


class FeedParser:
    """Parses a feed document into a normalized Feed."""

    def __init__(self, max_items: int = MAX_FEED_ITEMS):
        self.max_items = max_items

    def parse(self, xml_text: str) -> Feed:
        xml_text = (xml_text or "").strip()
        errors = []

        if not is_well_formed(xml_text):
            errors.append("XML parsing error detected")

        soup = BeautifulSoup(xml_text, 'xml')

        channel = _find(soup, ['channel'])
        root = None
        feed_format = 'unknown'
        entries = []
        if channel is not None:
            root = channel
            feed_format = 'rss'
            entries = channel.find_all('item')
        else:
            atom = _find(soup, ['feed'])
            if atom is not None:
                root = atom
                feed_format = 'atom'
                entries = atom.find_all('entry')

        if not entries:
            errors.append("No items found in feed")

        title = description = link = ""
        if root is not None:
            title = _text(_find(root, ['title'], recursive=False))
            description = _text(_find(root, ['description', 'subtitle'], recursive=False))
            link = _link(_find(root, ['link'], recursive=False))

        if not title:
            title = UNTITLED_FEED
            errors.append("Missing feed title")

        items = []
        for index, entry in enumerate(entries[:self.max_items], start=1):
            item, item_errors = self._parse_item(entry, index)
            items.append(item)
            errors.extend(item_errors)

        logger.debug(
            f"Parsed {feed_format} feed {title!r}: {len(items)} of {len(entries)} items, "
            f"{len(errors)} errors"
        )

        return Feed(
            title=title,
            description=description,
            link=link,
            items=items,
            errors=errors,
            feed_format=feed_format,
        )

    def _parse_item(self, entry: Tag, index: int):
        errors = []

        title = _text(_find(entry, ['title']))
        if not title:
            title = UNTITLED_ITEM
            errors.append(f"Item {index}: Missing title")

        link = _link(_find(entry, ['link']))
        if not link:
            errors.append(f"Item {index}: Missing link")

        full_description = _text(_find(entry, ['description', 'summary', 'content']))
        display = strip_html(full_description)[:FEED_DESCRIPTION_DISPLAY_CHARS]

        item = FeedItem(
            title=title,
            link=link,
            description=display,
            published_at=_text(_find(entry, ['pubDate', 'published', 'updated'])),
            author=_author(entry),
        )
        return item, errors


def parse(xml_text: str) -> Feed:
    """Parse and validate an RSS 2.0 or Atom document."""
    return FeedParser().parse(xml_text)
