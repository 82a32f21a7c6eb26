"""
Fan-out aggregation and ranking of feed items.

Every source is fetched, parsed and classified on a thread pool. A failing
source contributes nothing; the join waits for all of them. Surviving items are
scored, filtered (positive score, question, within the time window), sorted by
score with a small recency tie-breaker and truncated.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Sequence

from ..core.config import SearchSettings
from ..core.models import AnalysisProgress, FeedItem, Source
from ..core.sources import get_sources
from .feed_fetcher import FeedFetcher
from .feed_parser import build_feed_item, parse_feed
from .scorer import relevance_score

logger = logging.getLogger(__name__)

ProgressSink = Callable[[AnalysisProgress], None]

STEP_FETCH = ("Récupération des sources", 10)
STEP_ANALYZE = ("Analyse des flux", 50)
STEP_RANK = ("Classement des résultats", 90)
STEP_DONE = ("Terminé", 100)


def ranking_key(item: FeedItem) -> float:
    """Score plus ``epoch_seconds / 1e9``; the time term only separates near-ties."""
    return (item.relevance_score or 0.0) + item.published_at.timestamp() / 1_000_000_000


class FeedAggregator:
    """Collects items from every source and returns the best-ranked questions.

    Args:
        sources: Feed registry (defaults to the built-in sources)
        settings: Search tunables (defaults to ``SearchSettings()``)
        fetcher: Feed fetcher; built from *settings* when omitted
    """

    def __init__(
        self,
        sources: Optional[Sequence[Source]] = None,
        settings: Optional[SearchSettings] = None,
        fetcher: Optional[FeedFetcher] = None,
    ):
        self.sources = tuple(sources) if sources is not None else get_sources()
        self.settings = settings or SearchSettings()
        self.fetcher = fetcher or FeedFetcher(self.settings)

    def collect_source(self, source: Source, location: str, now: datetime) -> List[FeedItem]:
        """Fetch, parse and classify one source's items."""
        items = []
        for document in self.fetcher.fetch(source, location):
            for entry in parse_feed(document):
                item = build_feed_item(entry, source, now, self.settings.preview_length)
                if item is not None:
                    items.append(item)
        logger.info(f"Collected {len(items)} items from '{source.display_name}'")
        return items

    def collect(self, location: str = "", now: Optional[datetime] = None) -> List[FeedItem]:
        """Run every source concurrently and merge results in registry order."""
        now = now or datetime.now(timezone.utc)
        if not self.sources:
            return []

        workers = max(1, min(self.settings.max_workers, len(self.sources)))
        with ThreadPoolExecutor(max_workers=workers) as ex:
            futures = [(source, ex.submit(self.collect_source, source, location, now)) for source in self.sources]

        all_items: List[FeedItem] = []
        failures = 0
        for source, fut in futures:
            try:
                all_items.extend(fut.result())
            except Exception as e:
                failures += 1
                logger.error(f"Error processing feed '{source.display_name}': {e}")
        if failures:
            logger.info(f"{failures}/{len(self.sources)} sources failed")
        return all_items

    def rank(
        self,
        keyword: str,
        location: str = "",
        progress: Optional[ProgressSink] = None,
        now: Optional[datetime] = None,
    ) -> List[FeedItem]:
        """Return at most ``max_results`` question items ordered by relevance.

        Args:
            keyword: Search keyword (whitespace-separated terms)
            location: Optional location; restricts sources and boosts regional items
            progress: Optional callback receiving AnalysisProgress milestones
            now: Reference time (defaults to the current UTC time)

        Returns:
            Ranked items; empty when nothing qualifies or every source failed
        """
        now = now or datetime.now(timezone.utc)

        def report(step):
            if progress is not None:
                progress(AnalysisProgress(*step))

        report(STEP_FETCH)
        items = self.collect(location, now)

        report(STEP_ANALYZE)
        cutoff = now - timedelta(days=self.settings.time_window_days)
        candidates = []
        for item in items:
            scored = item.with_score(relevance_score(item, keyword, location, now))
            if scored.relevance_score > 0 and scored.is_question and scored.published_at > cutoff:
                candidates.append(scored)
        logger.info(f"{len(candidates)} of {len(items)} items passed the relevance filters for '{keyword}'")

        report(STEP_RANK)
        ranked = sorted(candidates, key=ranking_key, reverse=True)[: self.settings.max_results]

        if not ranked:
            logger.info(f"No relevant items found for '{keyword}'")
        report(STEP_DONE)
        return ranked
