import sys
from pathlib import Path

import pytest
import requests

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from freelance_radar.core.config import SearchSettings  # noqa: E402
from freelance_radar.core.http_client import FeedHTTPClient  # noqa: E402
from freelance_radar.core.models import Source  # noqa: E402
from freelance_radar.processors.feed_fetcher import FeedFetcher, default_client_factory  # noqa: E402

FRENCH = Source("https://forum.example.fr/feed", "Forum FR", 1.0, "rss", "france")
BELGIAN = Source("https://forum.example.be/feed", "Forum BE", 1.0, "rss", "belgium")


def test_fetch_returns_document(make_transport):
    transport = make_transport({FRENCH.url: b"<rss/>"})
    fetcher = FeedFetcher(client_factory=transport)
    assert fetcher.fetch(FRENCH, "") == [b"<rss/>"]
    assert transport.calls == [FRENCH.url]
    assert transport.closed == 1


def test_location_mismatch_skips_network(make_transport):
    transport = make_transport({BELGIAN.url: b"<rss/>", FRENCH.url: b"<rss/>"})
    fetcher = FeedFetcher(client_factory=transport)
    assert fetcher.fetch(BELGIAN, "Paris") == []
    assert fetcher.fetch(FRENCH, "Berlin") == []
    assert transport.calls == []


@pytest.mark.parametrize(
    "error",
    [
        requests.HTTPError("503 Server Error"),
        requests.Timeout("timed out"),
        requests.ConnectionError("Name or service not known"),
    ],
)
def test_transport_errors_become_empty_results(make_transport, error):
    transport = make_transport({FRENCH.url: error})
    fetcher = FeedFetcher(client_factory=transport)
    assert fetcher.fetch(FRENCH, "Lyon") == []
    assert transport.calls == [FRENCH.url]
    assert transport.closed == 1


def test_default_client_factory_uses_settings():
    settings = SearchSettings(timeout=3, relay_url="https://relay.example/raw?url=", user_agent="test-agent")
    with default_client_factory(settings) as client:
        assert client.timeout == 3
        assert client.session.headers["User-Agent"] == "test-agent"
        assert client.build_url("https://a.fr/feed?x=1") == "https://relay.example/raw?url=https%3A%2F%2Fa.fr%2Ffeed%3Fx%3D1"


def test_http_client_direct_url_without_relay():
    with FeedHTTPClient() as client:
        assert client.build_url("https://a.fr/feed") == "https://a.fr/feed"


def _response(status, body=b""):
    response = requests.Response()
    response.status_code = status
    response._content = body
    response.url = "https://forum.example.fr/feed"
    return response


def test_http_client_returns_body_on_success(monkeypatch):
    client = FeedHTTPClient(timeout=5)
    seen = {}

    def fake_get(url, headers=None, timeout=None):
        seen["url"] = url
        seen["timeout"] = timeout
        return _response(200, b"<rss/>")

    monkeypatch.setattr(client.session, "get", fake_get)
    assert client.get_content("https://forum.example.fr/feed") == b"<rss/>"
    assert seen == {"url": "https://forum.example.fr/feed", "timeout": 5}
    client.close()


def test_http_client_raises_on_non_2xx(monkeypatch):
    client = FeedHTTPClient()
    monkeypatch.setattr(client.session, "get", lambda url, headers=None, timeout=None: _response(404))
    with pytest.raises(requests.HTTPError):
        client.get_content("https://forum.example.fr/feed")
    client.close()


def test_fetcher_with_real_client_handles_http_error(monkeypatch):
    monkeypatch.setattr(
        requests.Session,
        "get",
        lambda self, url, headers=None, timeout=None: _response(500),
    )
    assert FeedFetcher().fetch(FRENCH, "") == []
