# tests/test_serp.py
"""Tests for the SERP snippet simulator."""

import pytest
from seotools.serp import display_url, length_status, simulate, truncate
from seotools.config import AnalysisThresholds


class TestSimulate:
    """Test suite for simulate()."""

    def test_title_at_limit_is_good_and_untruncated(self):
        title = "a" * 60

        preview = simulate(title, "https://example.com/", "", device="desktop")

        assert preview.display_title == title
        assert preview.title_status == "Good"

    def test_title_over_limit_is_truncated(self):
        title = "a" * 61

        preview = simulate(title, "https://example.com/", "", device="desktop")

        assert preview.display_title == "a" * 60 + "..."
        assert preview.title_status == "Too Long"
        assert preview.title_length == 61

    def test_mobile_truncation(self):
        preview = simulate("t" * 58, "https://example.com/", "d" * 130, device="mobile")

        assert preview.display_title == "t" * 55 + "..."
        assert preview.display_description == "d" * 120 + "..."
        assert preview.title_status == "Good"
        assert preview.description_status == "Good"

    def test_description_bands(self):
        assert simulate("", "", "", device="desktop").description_status == "Empty"
        assert simulate("", "", "d" * 119).description_status == "Too Short"
        assert simulate("", "", "d" * 160).description_status == "Good"
        assert simulate("", "", "d" * 161).description_status == "Too Long"

    def test_display_url(self):
        preview = simulate("Title", "https://www.example.com/blog/post?utm=1", "")

        assert preview.display_url == "www.example.com/blog/post"

    def test_unparseable_url_is_shown_raw(self):
        assert simulate("Title", "example.com/page", "").display_url == "example.com/page"

    def test_unbalanced_ipv6_bracket_is_shown_raw(self):
        preview = simulate("Title", "http://[::1/page", "")

        assert preview.display_url == "http://[::1/page"

    def test_url_without_host_is_shown_raw(self):
        assert simulate("Title", "http://:80/page", "").display_url == "http://:80/page"

    def test_unknown_device(self):
        with pytest.raises(ValueError):
            simulate("Title", "https://example.com/", "", device="tablet")

    def test_custom_thresholds(self):
        thresholds = AnalysisThresholds(desktop_title_chars=10, title_min=5, title_max=10)

        preview = simulate("a" * 11, "", "", thresholds=thresholds)

        assert preview.display_title == "a" * 10 + "..."
        assert preview.title_status == "Too Long"


class TestHelpers:
    """Test suite for the SERP helpers."""

    @pytest.mark.parametrize("length,expected", [
        (0, "Empty"),
        (29, "Too Short"),
        (30, "Good"),
        (60, "Good"),
        (61, "Too Long"),
    ])
    def test_title_bands(self, length, expected):
        assert length_status(length, 30, 60) == expected

    def test_truncate_short_text(self):
        assert truncate("short", 10) == "short"

    def test_display_url_without_path(self):
        assert display_url("https://example.com") == "example.com"
