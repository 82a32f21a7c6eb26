"""Shared text processing utilities.

Markup cleaning for feed bodies, preview truncation, and French relative-age
formatting for display next to each item.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

from bs4 import BeautifulSoup
from dateutil.relativedelta import relativedelta

from .lexicons import AGE_FUTURE_TEMPLATE, AGE_PAST_TEMPLATE, AGE_UNITS

PREVIEW_LENGTH = 300
ELLIPSIS = "..."

MINUTES_IN_DAY = 1440
MINUTES_IN_MONTH = 43200

# Applied in this order; asides may span lines in extracted feed text.
_LINK_COMMENTS_RE = re.compile(r"\[link\].*?\[comments\]", re.DOTALL)
_PARENTHETICAL_RE = re.compile(r"\([^()]*\)")
_SUBMITTED_BY_RE = re.compile(r"submitted by.*?to", re.DOTALL)
_BRACKETED_RE = re.compile(r"\[[^\[\]]*\]")


def _strip_nested(pattern: re.Pattern, text: str) -> str:
    """Remove innermost matches repeatedly so nested groups go entirely."""
    while True:
        stripped = pattern.sub("", text)
        if stripped == text:
            return text
        text = stripped


def sanitize(text: Optional[str]) -> str:
    """Reduce feed markup to its visible plain text.

    Script and style blocks are dropped before text extraction. Aggregator
    boilerplate is then removed: ``[link] ... [comments]`` runs, parenthetical
    asides, ``submitted by ... to`` credits and any leftover ``[...]`` token.

    Args:
        text: HTML fragment or plain text from a feed entry

    Returns:
        Cleaned text with surrounding whitespace trimmed ("" for empty input)

    Examples:
        >>> sanitize("<p>Besoin d'aide <script>alert(1)</script>(hors sujet)</p>")
        "Besoin d'aide"
        >>> sanitize("submitted by /u/jane to /r/freelance [link] [comments]")
        '/r/freelance'
    """
    if not text:
        return ""

    soup = BeautifulSoup(text, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    plain = soup.get_text()

    plain = _LINK_COMMENTS_RE.sub("", plain)
    plain = _strip_nested(_PARENTHETICAL_RE, plain)
    plain = _SUBMITTED_BY_RE.sub("", plain)
    plain = _strip_nested(_BRACKETED_RE, plain)
    return plain.strip()


def truncate_preview(text: str, limit: int = PREVIEW_LENGTH) -> str:
    """Cut *text* to *limit* characters and append the ellipsis marker."""
    return (text or "")[:limit] + ELLIPSIS


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def _unit(key: str, count: int) -> str:
    singular, plural = AGE_UNITS[key]
    return singular if count == 1 else plural.format(count=count)


def _distance_words(earlier: datetime, later: datetime) -> str:
    """Describe the gap between two instants with the coarsest sensible unit."""
    minutes = _round_half_up((later - earlier).total_seconds() / 60)

    if minutes < 1:
        return _unit("less_than_minute", 1)
    if minutes < 45:
        return _unit("minute", minutes)
    if minutes < 90:
        return _unit("about_hour", 1)
    if minutes < MINUTES_IN_DAY:
        return _unit("about_hour", _round_half_up(minutes / 60))
    if minutes < 2520:
        return _unit("day", 1)
    if minutes < MINUTES_IN_MONTH:
        return _unit("day", _round_half_up(minutes / MINUTES_IN_DAY))
    if minutes < 2 * MINUTES_IN_MONTH:
        return _unit("about_month", _round_half_up(minutes / MINUTES_IN_MONTH))

    diff = relativedelta(later, earlier)
    months = diff.years * 12 + diff.months
    if months < 12:
        return _unit("month", _round_half_up(minutes / MINUTES_IN_MONTH))

    years, remainder = divmod(months, 12)
    if remainder < 3:
        return _unit("about_year", years)
    if remainder < 9:
        return _unit("over_year", years)
    return _unit("almost_year", years + 1)


def format_age(published_at: datetime, now: Optional[datetime] = None) -> str:
    """Return a French relative age such as ``"il y a 3 jours"``.

    Future timestamps read ``"dans ..."``.

    Examples:
        >>> from datetime import timedelta
        >>> ref = datetime(2024, 5, 10, tzinfo=timezone.utc)
        >>> format_age(ref - timedelta(days=2), ref)
        'il y a 2 jours'
        >>> format_age(ref - timedelta(minutes=90), ref)
        'il y a environ 2 heures'
    """
    now = now or datetime.now(timezone.utc)
    if now >= published_at:
        return AGE_PAST_TEMPLATE.format(distance=_distance_words(published_at, now))
    return AGE_FUTURE_TEMPLATE.format(distance=_distance_words(now, published_at))


__all__ = [
    "sanitize",
    "truncate_preview",
    "format_age",
    "PREVIEW_LENGTH",
    "ELLIPSIS",
]
