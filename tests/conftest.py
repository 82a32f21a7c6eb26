"""Shared fixtures: a fixed clock, an RSS document builder and a fake HTTP transport."""

from __future__ import annotations

import sys
import threading
import time
from datetime import datetime, timezone
from email.utils import format_datetime
from pathlib import Path
from xml.sax.saxutils import escape

import pytest

# Ensure the repository's src/ directory is importable without installation.
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeFeedClient:
    """Stands in for FeedHTTPClient; serves canned bodies or raises canned errors."""

    def __init__(self, transport):
        self.transport = transport

    def get_content(self, url):
        with self.transport.lock:
            self.transport.calls.append(url)
        delay = self.transport.delays.get(url)
        if delay:
            time.sleep(delay)
        response = self.transport.responses.get(url)
        if response is None:
            raise KeyError(f"unexpected URL {url}")
        if isinstance(response, BaseException):
            raise response
        return response

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.transport.closed += 1


class FakeTransport:
    """Client factory recording every requested URL."""

    def __init__(self, responses=None, delays=None):
        self.responses = dict(responses or {})
        self.delays = dict(delays or {})
        self.calls = []
        self.closed = 0
        self.lock = threading.Lock()

    def __call__(self, settings):
        return FakeFeedClient(self)


def build_rss(items):
    """Return RSS 2.0 bytes for ``(title, description, published_at)`` tuples."""
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0"><channel><title>Test</title><link>https://example.fr</link>'
        '<description>Test feed</description>',
    ]
    for index, (title, description, published_at) in enumerate(items):
        parts.append(
            "<item>"
            f"<title>{escape(title)}</title>"
            f"<link>https://example.fr/post/{index}</link>"
            f"<description>{escape(description)}</description>"
            f"<pubDate>{format_datetime(published_at)}</pubDate>"
            "</item>"
        )
    parts.append("</channel></rss>")
    return "".join(parts).encode("utf-8")


@pytest.fixture
def fixed_now():
    return datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def make_transport():
    return FakeTransport


@pytest.fixture
def rss():
    return build_rss
