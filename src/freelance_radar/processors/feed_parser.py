"""
Feed document parsing.
Turns raw RSS/Atom documents into normalized entries, then into FeedItems.
"""

from __future__ import annotations

import calendar
import io
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple, Union

import feedparser
from dateutil import parser as dtparser

from ..core.models import FeedItem, Source
from ..core.text_utils import PREVIEW_LENGTH, format_age, sanitize, truncate_preview
from .classifier import is_question

logger = logging.getLogger(__name__)

RSS = "rss"
ATOM = "atom"


@dataclass(frozen=True)
class ParsedEntry:
    """Fields extracted from one ``<item>`` or ``<entry>``; missing values are ``""``."""

    title: str = ""
    link: str = ""
    content: str = ""
    author: str = ""
    published: str = ""
    published_at: Optional[datetime] = None


def detect_dialect(parsed: Any) -> Optional[str]:
    """Return ``"rss"``, ``"atom"`` or None from a feedparser result."""
    version = (parsed.get('version') or '').lower()
    if version.startswith(RSS):
        return RSS
    if version.startswith(ATOM):
        return ATOM
    return None


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _entry_link(entry: Any) -> str:
    """Element text first, then the href of the first link element."""
    link = _text(entry.get('link'))
    if link:
        return link
    for candidate in entry.get('links') or []:
        href = _text(candidate.get('href'))
        if href:
            return href
    return ""


def _entry_body(entry: Any) -> str:
    """Encoded/Atom content first, then description/summary."""
    for block in entry.get('content') or []:
        value = block.get('value')
        if isinstance(value, str) and value.strip():
            return value
    for key in ('description', 'summary'):
        value = entry.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return ""


def _entry_author(entry: Any) -> str:
    author = _text(entry.get('author'))
    if author:
        return author
    detail = entry.get('author_detail') or {}
    return _text(detail.get('name'))


def _entry_date(entry: Any) -> Tuple[str, Optional[datetime]]:
    """Return the raw date string and its UTC datetime (None when unparseable)."""
    raw = _text(entry.get('published')) or _text(entry.get('updated'))

    # feedparser normalizes *_parsed tuples to UTC
    struct = entry.get('published_parsed') or entry.get('updated_parsed')
    if struct:
        try:
            return raw, datetime.fromtimestamp(calendar.timegm(struct), tz=timezone.utc)
        except (OverflowError, OSError, ValueError, TypeError):
            pass

    if raw:
        try:
            parsed = dtparser.parse(raw)
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return raw, parsed.astimezone(timezone.utc)
        except (ValueError, OverflowError):
            logger.debug(f"Unparseable entry date: {raw!r}")
            return raw, None

    return raw, None


def parse_feed(raw_document: Union[str, bytes, None]) -> List[ParsedEntry]:
    """Parse an RSS or Atom document into normalized entries.

    Unrecognized or malformed documents yield an empty list instead of raising.
    """
    if not raw_document:
        return []
    if isinstance(raw_document, str):
        raw_document = raw_document.encode('utf-8')

    # A file object keeps feedparser from treating the payload as a URL or path.
    parsed = feedparser.parse(io.BytesIO(raw_document))
    dialect = detect_dialect(parsed)
    if dialect is None:
        if parsed.get('bozo'):
            logger.warning(f"Unrecognized feed document: {parsed.get('bozo_exception')}")
        else:
            logger.warning("Unrecognized feed document (neither RSS nor Atom)")
        return []
    if parsed.get('bozo'):
        logger.debug(f"Feed has parsing issues: {parsed.get('bozo_exception')}")

    entries = []
    for entry in parsed.get('entries') or []:
        published, published_at = _entry_date(entry)
        entries.append(
            ParsedEntry(
                title=_text(entry.get('title')),
                link=_entry_link(entry),
                content=_entry_body(entry),
                author=_entry_author(entry),
                published=published,
                published_at=published_at,
            )
        )
    logger.debug(f"Parsed {len(entries)} {dialect} entries")
    return entries


def build_feed_item(
    entry: ParsedEntry,
    source: Source,
    now: Optional[datetime] = None,
    preview_length: int = PREVIEW_LENGTH,
) -> Optional[FeedItem]:
    """Clean, classify and wrap *entry*; returns None when it has no valid date."""
    if entry.published_at is None:
        logger.debug(f"Dropping entry without a valid date from '{source.display_name}': {entry.title[:50]}")
        return None

    cleaned = sanitize(entry.content)
    return FeedItem(
        title=entry.title,
        link=entry.link,
        raw_content=entry.content,
        cleaned_content=truncate_preview(cleaned, preview_length),
        author=entry.author or None,
        published_at=entry.published_at,
        formatted_age=format_age(entry.published_at, now),
        source_name=source.display_name,
        is_question=is_question(entry.title, cleaned),
        region=source.region,
    )
