"""Data records shared across the pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional
from urllib.parse import urlparse

SOURCE_TYPES = ("rss", "atom")


@dataclass(frozen=True)
class Source:
    """A configured feed endpoint with its trust weight and region tag."""

    url: str
    display_name: str
    weight: float = 1.0
    source_type: str = "rss"
    region: str = ""

    def __post_init__(self) -> None:
        parsed = urlparse(self.url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Source '{self.display_name}' has an invalid URL: {self.url!r}")
        if not isinstance(self.weight, (int, float)) or not 0 < self.weight <= 1:
            raise ValueError(f"Source '{self.display_name}' weight must be in (0, 1], got {self.weight!r}")
        if self.source_type not in SOURCE_TYPES:
            raise ValueError(
                f"Source '{self.display_name}' type must be one of {SOURCE_TYPES}, got {self.source_type!r}"
            )


@dataclass(frozen=True)
class FeedItem:
    """One normalized feed entry, ready for scoring.

    ``cleaned_content`` is the sanitized preview (never markup). ``relevance_score``
    stays ``None`` until the ranker attaches it through :meth:`with_score`.
    """

    title: str
    link: str
    raw_content: str
    cleaned_content: str
    published_at: datetime
    formatted_age: str
    source_name: str
    is_question: bool
    region: str
    author: Optional[str] = None
    relevance_score: Optional[float] = None

    def with_score(self, score: float) -> "FeedItem":
        return replace(self, relevance_score=score)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable mapping (ISO-8601 ``published_at``)."""
        data = asdict(self)
        data["published_at"] = self.published_at.isoformat()
        return data


@dataclass(frozen=True)
class AnalysisProgress:
    step: str
    percent: int

    def __post_init__(self) -> None:
        if not 0 <= self.percent <= 100:
            raise ValueError(f"percent must be within [0, 100], got {self.percent}")


__all__ = ["Source", "FeedItem", "AnalysisProgress", "SOURCE_TYPES"]
