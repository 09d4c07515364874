# tests/test_feed_parser.py
"""Tests for the RSS/Atom feed parser."""

import pytest
from seotools.feed_parser import FeedParser, parse, strip_html
from seotools.constants import MAX_FEED_ITEMS, UNTITLED_FEED, UNTITLED_ITEM


RSS_FEED = """<?xml version="1.0"?>
<rss version="2.0" xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel>
    <title>Example Blog</title>
    <link>https://example.com/</link>
    <description>News from Example</description>
    <item>
      <title>First post</title>
      <link>https://example.com/first</link>
      <description>&lt;p&gt;Hello &lt;b&gt;world&lt;/b&gt;&lt;/p&gt;</description>
      <pubDate>Mon, 01 Jan 2024 00:00:00 GMT</pubDate>
      <dc:creator>Jane Doe</dc:creator>
    </item>
    <item>
      <title>Second post</title>
      <link>https://example.com/second</link>
    </item>
  </channel>
</rss>
"""

ATOM_FEED = """<?xml version="1.0"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom Example</title>
  <subtitle>An Atom feed</subtitle>
  <link href="https://example.com/"/>
  <entry>
    <title>Entry one</title>
    <link href="https://example.com/entry-one"/>
    <summary>Short summary</summary>
    <updated>2024-01-01T00:00:00Z</updated>
    <author><name>Ann</name></author>
  </entry>
</feed>
"""


def rss_with_items(count):
    items = "".join(
        f"<item><title>Post {n}</title><link>https://example.com/{n}</link></item>"
        for n in range(1, count + 1)
    )
    return f"<rss><channel><title>Big</title>{items}</channel></rss>"


class TestFeedParser:
    """Test suite for FeedParser."""

    @pytest.fixture
    def parser(self):
        return FeedParser()

    def test_parse_rss(self, parser):
        feed = parser.parse(RSS_FEED)

        assert feed.feed_format == "rss"
        assert feed.title == "Example Blog"
        assert feed.link == "https://example.com/"
        assert feed.description == "News from Example"
        assert feed.is_valid is True
        assert len(feed.items) == 2

        first = feed.items[0]
        assert first.title == "First post"
        assert first.link == "https://example.com/first"
        assert first.description == "Hello world"
        assert first.published_at == "Mon, 01 Jan 2024 00:00:00 GMT"
        assert first.author == "Jane Doe"

    def test_parse_atom(self, parser):
        feed = parser.parse(ATOM_FEED)

        assert feed.feed_format == "atom"
        assert feed.title == "Atom Example"
        assert feed.description == "An Atom feed"
        assert feed.link == "https://example.com/"
        assert feed.is_valid is True

        entry = feed.items[0]
        assert entry.title == "Entry one"
        assert entry.link == "https://example.com/entry-one"
        assert entry.description == "Short summary"
        assert entry.published_at == "2024-01-01T00:00:00Z"
        assert entry.author == "Ann"

    def test_atom_author_uses_name(self, parser):
        xml = ATOM_FEED.replace(
            "<author><name>Ann</name></author>",
            "<author><name>Jo</name><email>jo@example.com</email></author>",
        )

        assert parser.parse(xml).items[0].author == "Jo"

    def test_leading_whitespace_is_ignored(self, parser):
        feed = parser.parse("\n\n   " + RSS_FEED)

        assert feed.is_valid is True

    def test_malformed_xml(self, parser):
        feed = parser.parse("<rss><channel><title>Broken</title><item><title>A</title>")

        assert feed.is_valid is False
        assert "XML parsing error detected" in feed.errors

    def test_empty_input(self, parser):
        feed = parser.parse("")

        assert feed.title == UNTITLED_FEED
        assert feed.feed_format == "unknown"
        assert feed.items == []
        assert feed.errors == [
            "XML parsing error detected",
            "No items found in feed",
            "Missing feed title",
        ]

    def test_feed_without_items(self, parser):
        feed = parser.parse("<rss><channel><title>Empty</title></channel></rss>")

        assert feed.errors == ["No items found in feed"]

    def test_missing_item_fields(self, parser):
        feed = parser.parse(
            "<rss><channel><title>T</title>"
            "<item><description>No title or link</description></item>"
            "</channel></rss>"
        )

        assert feed.items[0].title == UNTITLED_ITEM
        assert feed.errors == ["Item 1: Missing title", "Item 1: Missing link"]

    def test_item_cap(self, parser):
        feed = parser.parse(rss_with_items(MAX_FEED_ITEMS + 5))

        assert len(feed.items) == MAX_FEED_ITEMS
        assert feed.items[-1].title == f"Post {MAX_FEED_ITEMS}"

    def test_description_is_truncated(self, parser):
        long_text = "a" * 500
        feed = parser.parse(
            "<rss><channel><title>T</title><item><title>A</title>"
            f"<link>https://example.com/a</link><description>{long_text}</description>"
            "</item></channel></rss>"
        )

        assert len(feed.items[0].description) == 200

    def test_parsing_is_idempotent(self, parser):
        assert parser.parse(RSS_FEED) == parser.parse(RSS_FEED)
        assert parse(ATOM_FEED) == parse(ATOM_FEED)

    def test_to_dict(self, parser):
        data = parser.parse(RSS_FEED).to_dict()

        assert data["is_valid"] is True
        assert data["items"][1]["title"] == "Second post"


class TestStripHtml:
    """Test suite for description cleanup."""

    def test_plain_text_untouched(self):
        assert strip_html("  plain  ") == "plain"

    def test_markup_removed(self):
        assert strip_html("<p>Hello <em>there</em></p>") == "Hello there"
