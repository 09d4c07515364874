# tests/test_cli.py
"""Tests for the command-line interface."""

import json
from unittest.mock import patch

import pytest
from seotools.cli import main
from seotools.exceptions import FetchError
from seotools.models import FetchResult


def run(capsys, *argv):
    main(["--log-level", "ERROR", *argv])
    return capsys.readouterr().out


class TestAnalyzerCommands:
    """Test suite for the analyzer subcommands."""

    def test_rewrite_json(self, capsys, tmp_path):
        rules = tmp_path / ".htaccess"
        rules.write_text("RewriteEngine On\nRewriteRule ^old-page/?$ /new-page [R=301,L]\n")

        output = run(capsys, "rewrite", "/old-page", "--rules", str(rules), "-o", "json")
        data = json.loads(output)

        assert data[0]["final_path"] == "/new-page"
        assert data[0]["steps"][0]["status_code"] == 301

    def test_rewrite_text(self, capsys, tmp_path):
        rules = tmp_path / ".htaccess"
        rules.write_text("RewriteRule ^a$ /b [L]\n")

        output = run(capsys, "rewrite", "/a", "/z", "--rules", str(rules))

        assert "Final path: /b" in output
        assert "Final path: /z" in output

    def test_hreflang_from_file(self, capsys, tmp_path):
        page = tmp_path / "page.html"
        page.write_text(
            '<link rel="alternate" hreflang="en" href="https://example.com/" />'
            '<link rel="alternate" hreflang="en" href="https://example.com/b" />'
        )

        data = json.loads(run(capsys, "hreflang", "--file", str(page), "-o", "json"))

        assert data["is_valid"] is False
        assert len(data["entries"]) == 2

    def test_bots_from_file(self, capsys, tmp_path):
        robots = tmp_path / "robots.txt"
        robots.write_text("User-agent: GPTBot\nDisallow: /\n")

        data = json.loads(run(capsys, "bots", "--file", str(robots), "-o", "json"))

        blocked = [r["user_agent_token"] for r in data if not r["allowed"]]
        assert blocked == ["GPTBot"]

    def test_bots_without_robots_txt(self, capsys):
        with patch("seotools.cli.PageFetcher.fetch") as mock_fetch:
            mock_fetch.side_effect = FetchError("https://example.com/robots.txt", "HTTP 404", status_code=404)
            data = json.loads(run(capsys, "bots", "--url", "https://example.com/", "-o", "json"))

        assert all(r["allowed"] for r in data)
        mock_fetch.assert_called_once_with("https://example.com/robots.txt")

    def test_serp_json(self, capsys):
        data = json.loads(run(capsys, "serp", "--title", "a" * 61, "--url", "https://example.com/x", "-o", "json"))

        assert data["title_status"] == "Too Long"
        assert data["display_url"] == "example.com/x"

    def test_serp_uses_config_file(self, capsys, tmp_path):
        config = tmp_path / "thresholds.json"
        config.write_text(json.dumps({"thresholds": {"desktop_title_chars": 20, "title_max": 20}}))

        data = json.loads(run(capsys, "--config", str(config), "serp", "--title", "a" * 25, "-o", "json"))

        assert data["display_title"] == "a" * 20 + "..."
        assert data["title_status"] == "Too Short"

    def test_fetch_command(self, capsys):
        page = FetchResult(url="https://example.com/", content="<title>Home</title>", elapsed_ms=5)
        with patch("seotools.cli.PageFetcher.fetch", return_value=page):
            data = json.loads(run(capsys, "fetch", "https://example.com/", "-o", "json"))

        assert data["title"] == "Home"
        assert data["load_time_ms"] == 5

    def test_fetch_failure_exits_with_error(self, capsys):
        with patch("seotools.cli.PageFetcher.fetch") as mock_fetch:
            mock_fetch.side_effect = FetchError("https://example.com/", "Connection error: refused")
            with pytest.raises(SystemExit) as exc_info:
                run(capsys, "amp", "--url", "https://example.com/")

        assert exc_info.value.code == 1
        assert capsys.readouterr().out.startswith("Error: Failed to fetch https://example.com/")


class TestGeneratorCommands:
    """Test suite for the generator subcommands."""

    def test_robots(self, capsys):
        output = run(capsys, "robots", "--disallow", "/admin/", "--sitemap", "https://example.com/sitemap.xml")

        assert output == "User-agent: *\nDisallow: /admin/\n\nSitemap: https://example.com/sitemap.xml\n"

    def test_sitemap_to_file(self, capsys, tmp_path):
        out = tmp_path / "sitemap.xml"

        run(capsys, "sitemap", "https://example.com/", "--lastmod", "2024-01-01",
            "--hreflang", "-f", str(out))

        xml = out.read_text()
        assert "<loc>https://example.com/</loc>" in xml
        assert "<lastmod>2024-01-01</lastmod>" in xml

    def test_sitemap_invalid_priority(self, capsys):
        with pytest.raises(SystemExit):
            run(capsys, "sitemap", "https://example.com/", "--priority", "2")

    def test_schema_script_tag(self, capsys):
        output = run(capsys, "schema", "FAQ", "--field", "faqs=Is it free?\\nYes.", "--script-tag")

        assert output.startswith('<script type="application/ld+json">')
        assert '"FAQPage"' in output
        assert '"Is it free?"' in output

    def test_local_search(self, capsys):
        output = run(capsys, "local-search", "pizza", "--location", "Paris, France")

        assert output.startswith("https://www.google.com/search?q=pizza&gl=fr&uule=w+CAIQICI")

    def test_no_command_prints_help(self, capsys):
        output = run(capsys)

        assert "usage" in output.lower()
