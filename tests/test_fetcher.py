# tests/test_fetcher.py
"""Tests for the remote page fetcher."""

from unittest.mock import Mock

import pytest
import requests
from seotools.exceptions import FetchError, SeoToolsError
from seotools.fetcher import PageFetcher, robots_url


def make_response(text="", json_data=None, status_code=200, headers=None):
    response = Mock()
    response.text = text
    response.status_code = status_code
    response.headers = headers or {}
    if json_data is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


class TestProxyMode:
    """Test suite for fetching through the CORS proxy."""

    def test_reads_contents_and_status(self, session):
        session.get.return_value = make_response(json_data={
            "contents": "<html></html>",
            "status": {"http_code": 200, "response_headers": {"server": "nginx"}},
        })
        fetcher = PageFetcher(proxy_url="https://proxy.test/get", session=session)

        result = fetcher.fetch("https://example.com/")

        assert result.content == "<html></html>"
        assert result.status_code == 200
        assert result.headers == {"server": "nginx"}
        assert result.elapsed_ms >= 0
        session.get.assert_called_once_with(
            "https://proxy.test/get",
            params={"url": "https://example.com/"},
            timeout=fetcher.timeout,
        )

    def test_missing_status_defaults_to_200(self, session):
        session.get.return_value = make_response(json_data={"contents": "ok"})

        result = PageFetcher(session=session).fetch("https://example.com/")

        assert result.status_code == 200
        assert result.headers == {}

    def test_target_error_status(self, session):
        session.get.return_value = make_response(json_data={
            "contents": "Not Found",
            "status": {"http_code": 404},
        })

        with pytest.raises(FetchError) as exc_info:
            PageFetcher(session=session).fetch("https://example.com/robots.txt")

        assert exc_info.value.status_code == 404
        assert exc_info.value.url == "https://example.com/robots.txt"

    def test_non_json_response(self, session):
        session.get.return_value = make_response(text="<html>proxy error</html>")

        with pytest.raises(FetchError, match="non-JSON"):
            PageFetcher(session=session).fetch("https://example.com/")

    def test_missing_contents(self, session):
        session.get.return_value = make_response(json_data={"status": {"http_code": 200}})

        with pytest.raises(FetchError, match="no contents"):
            PageFetcher(session=session).fetch("https://example.com/")


class TestDirectMode:
    """Test suite for direct fetching."""

    def test_sends_user_agent(self, session):
        session.get.return_value = make_response(text="<html>direct</html>", headers={"x": "1"})
        fetcher = PageFetcher(mode="direct", session=session)

        result = fetcher.fetch("https://example.com/", user_agent="TestAgent/1.0")

        assert result.content == "<html>direct</html>"
        assert result.headers == {"x": "1"}
        assert session.get.call_args.kwargs["headers"] == {"User-Agent": "TestAgent/1.0"}

    def test_default_user_agent(self, session):
        session.get.return_value = make_response(text="")
        fetcher = PageFetcher(mode="direct", user_agent="Default/2.0", session=session)

        fetcher.fetch("https://example.com/")

        assert session.get.call_args.kwargs["headers"] == {"User-Agent": "Default/2.0"}

    def test_http_error(self, session):
        response = make_response(status_code=500)
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            "500 Server Error", response=response
        )
        session.get.return_value = response

        with pytest.raises(FetchError) as exc_info:
            PageFetcher(mode="direct", session=session).fetch("https://example.com/")

        assert exc_info.value.status_code == 500


class TestFetchErrors:
    """Test suite for failures common to both modes."""

    @pytest.mark.parametrize("url", ["example.com", "ftp://example.com/file", "", "https://"])
    def test_invalid_url(self, session, url):
        with pytest.raises(FetchError):
            PageFetcher(session=session).fetch(url)

        session.get.assert_not_called()

    def test_timeout(self, session):
        session.get.side_effect = requests.exceptions.Timeout()

        with pytest.raises(FetchError, match="timeout"):
            PageFetcher(timeout=5, session=session).fetch("https://example.com/")

    def test_connection_error(self, session):
        session.get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(FetchError) as exc_info:
            PageFetcher(session=session).fetch("https://example.com/")

        assert isinstance(exc_info.value, SeoToolsError)
        assert str(exc_info.value).startswith("Failed to fetch https://example.com/:")

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            PageFetcher(mode="browser")


def test_robots_url():
    assert robots_url("https://example.com/blog/post?x=1") == "https://example.com/robots.txt"
