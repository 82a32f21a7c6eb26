"""HTTP transport for feed retrieval."""

from __future__ import annotations

from typing import Dict, Optional
from urllib.parse import quote

import requests

DEFAULT_USER_AGENT = "freelance-radar/0.1"
DEFAULT_TIMEOUT = 15


class FeedHTTPClient:
    """Single-attempt HTTP client for feed documents.

    Optionally routes requests through a relay endpoint (a CORS proxy such as
    ``https://api.allorigins.win/raw?url=``); the target URL is percent-encoded
    and appended to the relay prefix.

    Args:
        timeout: Request timeout in seconds (default: 15)
        relay_url: Optional relay prefix; empty means direct requests
        user_agent: User-Agent header sent with every request
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        relay_url: str = "",
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent})
        self.timeout = timeout
        self.relay_url = relay_url or ""

    def build_url(self, url: str) -> str:
        """Return the URL actually requested for *url* (relayed when configured)."""
        if not self.relay_url:
            return url
        return self.relay_url + quote(url, safe="")

    def get_content(self, url: str, headers: Optional[Dict[str, str]] = None) -> bytes:
        """GET *url* once and return the raw body.

        The body is left undecoded so the feed parser can honour the XML encoding
        declaration.

        Raises:
            requests.HTTPError: On non-2xx responses
            requests.RequestException: On timeouts, DNS and connection errors
        """
        response = self.session.get(self.build_url(url), headers=headers, timeout=self.timeout)
        response.raise_for_status()
        return response.content

    def close(self):
        """Close the underlying session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
