"""Per-source feed retrieval with location pre-filtering."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import requests

from ..core.config import SearchSettings
from ..core.http_client import FeedHTTPClient
from ..core.models import Source
from ..core.sources import is_location_relevant

logger = logging.getLogger(__name__)

ClientFactory = Callable[[SearchSettings], FeedHTTPClient]


def default_client_factory(settings: SearchSettings) -> FeedHTTPClient:
    return FeedHTTPClient(
        timeout=settings.timeout,
        relay_url=settings.relay_url,
        user_agent=settings.user_agent,
    )


class FeedFetcher:
    """Retrieves raw feed documents, one best-effort attempt per source."""

    def __init__(
        self,
        settings: Optional[SearchSettings] = None,
        client_factory: Optional[ClientFactory] = None,
    ):
        self.settings = settings or SearchSettings()
        self.client_factory = client_factory or default_client_factory

    def fetch(self, source: Source, target_location: str = "") -> List[bytes]:
        """Fetch the document for *source*.

        Returns:
            ``[document]`` on success; ``[]`` when the source is outside
            *target_location* (no request is made) or when the request fails
        """
        if not is_location_relevant(source.region, target_location):
            logger.debug(f"Skipping '{source.display_name}': region '{source.region}' does not match '{target_location}'")
            return []

        try:
            with self.client_factory(self.settings) as client:
                document = client.get_content(source.url)
        except requests.RequestException as e:
            logger.warning(f"Feed '{source.display_name}' unavailable: {e}")
            return []

        logger.debug(f"Fetched {len(document)} bytes from '{source.display_name}'")
        return [document]
