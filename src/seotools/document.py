"""Narrow query interface over a parsed HTML document.

Analyzers ask for tags and attributes through ParsedDocument only, so the
predicate logic does not depend on the parsing library underneath.
"""

from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag


class ParsedDocument:
    """HTML document queried by tag name and attribute values."""

    def __init__(self, html: str, parser: str = "html.parser"):
        self.html = html or ""
        self._soup = BeautifulSoup(self.html, parser)

    def find_all(self, tag: str, **attrs) -> List[Tag]:
        """Return every ``tag`` element whose attributes match ``attrs``.

        An attribute value of True matches any element carrying the
        attribute. ``rel`` is matched against each of its tokens.
        """
        return self._soup.find_all(tag, attrs=attrs)

    def first(self, tag: str, **attrs) -> Optional[Tag]:
        return self._soup.find(tag, attrs=attrs)

    def count(self, tag: str, **attrs) -> int:
        return len(self.find_all(tag, **attrs))

    def has(self, tag: str, **attrs) -> bool:
        return self.first(tag, **attrs) is not None

    def text_of(self, tag: str, **attrs) -> str:
        """Text content of the first matching element, or an empty string."""
        element = self.first(tag, **attrs)
        return element.get_text() if element else ""

    def attribute(self, tag: str, attr_name: str, **attrs) -> str:
        """Attribute ``attr_name`` of the first matching element, or an empty string."""
        element = self.first(tag, **attrs)
        if element is None:
            return ""
        value = element.get(attr_name, "")
        if isinstance(value, list):
            return " ".join(value)
        return value or ""

    @property
    def title(self) -> str:
        return self.text_of("title")

    def meta_content(self, name: str) -> str:
        return self.attribute("meta", "content", name=name)

    def body_text(self) -> str:
        """Trimmed text content of <body>, falling back to the whole document."""
        body = self._soup.body
        node = body if body is not None else self._soup
        return node.get_text().strip()
