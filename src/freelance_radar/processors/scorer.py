"""
Keyword relevance scoring for feed items.

Score components, in order:

- ``2`` points per occurrence of each whitespace-separated keyword term in
  title + preview (case-insensitive substring count);
- ``+10`` when the whole keyword appears in the title;
- ``+15`` when the item was classified as a question;
- ``x2`` for France-tagged items when a location was requested;
- recency: ``x2`` up to 7 days old, linear decay to zero at 30 days, ``x0.1``
  beyond that.

All components are non-negative, so the score is never below zero.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from ..core.lexicons import FRANCE_REGION
from ..core.models import FeedItem

TERM_WEIGHT = 2
TITLE_MATCH_BONUS = 10
QUESTION_BONUS = 15
LOCATION_MULTIPLIER = 2
FRESH_DAYS = 7
FRESH_MULTIPLIER = 2
DECAY_DAYS = 30
STALE_MULTIPLIER = 0.1

SECONDS_PER_DAY = 86400


def keyword_score(text: str, keyword: str) -> int:
    """Return ``2 x`` the total occurrences of each keyword term in *text*."""
    haystack = (text or "").lower()
    return sum(TERM_WEIGHT * haystack.count(term) for term in (keyword or "").lower().split())


def recency_multiplier(published_at: datetime, now: datetime) -> float:
    days_old = (now - published_at).total_seconds() / SECONDS_PER_DAY
    if days_old <= FRESH_DAYS:
        return FRESH_MULTIPLIER
    if days_old <= DECAY_DAYS:
        return (DECAY_DAYS - days_old) / DECAY_DAYS
    return STALE_MULTIPLIER


def relevance_score(
    item: FeedItem,
    keyword: str,
    location: str = "",
    now: Optional[datetime] = None,
) -> float:
    """Compute the relevance of *item* for a keyword and optional location.

    Args:
        item: Classified feed item
        keyword: Search keyword, possibly several words
        location: Requested location; any non-empty value enables the region multiplier
        now: Reference time for recency (defaults to the current UTC time)

    Returns:
        Non-negative score; 0.0 when nothing matched and the item is not a question
    """
    now = now or datetime.now(timezone.utc)
    score = float(keyword_score(f"{item.title} {item.cleaned_content}", keyword))

    phrase = (keyword or "").lower()
    if phrase.strip() and phrase in item.title.lower():
        score += TITLE_MATCH_BONUS

    if item.is_question:
        score += QUESTION_BONUS

    if location and item.region == FRANCE_REGION:
        score *= LOCATION_MULTIPLIER

    return score * recency_multiplier(item.published_at, now)
