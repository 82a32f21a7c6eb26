"""Static registry of feed sources and geographic matching."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Tuple

from .lexicons import FRANCE_REGION, FRENCH_LOCATION_ALIASES
from .models import Source

logger = logging.getLogger(__name__)

# French freelance and small-business communities, most relevant first.
DEFAULT_SOURCES: Tuple[Source, ...] = (
    Source("https://community.malt.com/feed", "Malt Community", 1.0, "rss", FRANCE_REGION),
    Source("https://forum.freelance-republic.fr/feed", "Freelance Republic Forum", 1.0, "rss", FRANCE_REGION),
    Source("https://www.freelance-info.fr/feed", "Freelance Info", 0.9, "rss", FRANCE_REGION),
    Source("https://www.portail-autoentrepreneur.fr/feed", "Portail Auto-Entrepreneur", 0.9, "rss", FRANCE_REGION),
    Source(
        "https://www.federation-auto-entrepreneur.fr/feed",
        "Fédération Auto-Entrepreneur",
        0.8,
        "rss",
        FRANCE_REGION,
    ),
    Source("https://www.codeur.com/blog/feed/", "Codeur.com Blog", 0.9, "rss", FRANCE_REGION),
    Source("https://www.freelance.com/blog/feed/", "Freelance.com Blog", 0.9, "rss", FRANCE_REGION),
    Source("https://www.lecoindesentrepreneurs.fr/feed/", "Le Coin des Entrepreneurs", 0.8, "rss", FRANCE_REGION),
    Source("https://www.netpme.fr/feed/", "NetPME", 0.7, "rss", FRANCE_REGION),
    Source(
        "https://www.journaldunet.com/management/direction-generale/rss/1/",
        "Journal du Net Management",
        0.7,
        "rss",
        FRANCE_REGION,
    ),
    Source("https://www.dynamique-mag.com/feed/", "Dynamique Entrepreneuriale", 0.7, "rss", FRANCE_REGION),
    Source("https://www.leblogdudirigeant.com/feed/", "Le Blog du Dirigeant", 0.7, "rss", FRANCE_REGION),
)


def get_sources() -> Tuple[Source, ...]:
    """Return the built-in source registry in priority order."""
    return DEFAULT_SOURCES


def build_sources(entries: Iterable[Mapping[str, Any]]) -> Tuple[Source, ...]:
    """Build a registry from config mappings.

    Each mapping needs ``url`` and ``name``; ``weight`` (1.0), ``type`` ("rss")
    and ``region`` ("") are optional. Entries with ``enabled: false`` are skipped.

    Raises:
        ValueError: If an entry is missing required keys or breaks a Source invariant
    """
    sources = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise ValueError(f"Source entry #{index} must be a mapping, got {type(entry).__name__}")
        if not entry.get("enabled", True):
            logger.debug("Skipping disabled source '%s'", entry.get("name", entry.get("url")))
            continue
        missing = [key for key in ("url", "name") if not entry.get(key)]
        if missing:
            raise ValueError(f"Source entry #{index} is missing required keys: {', '.join(missing)}")
        sources.append(
            Source(
                url=str(entry["url"]),
                display_name=str(entry["name"]),
                weight=entry.get("weight", 1.0),
                source_type=str(entry.get("type", "rss")).lower(),
                region=str(entry.get("region", "")).lower(),
            )
        )
    return tuple(sources)


def is_location_relevant(source_region: str, target_location: str) -> bool:
    """Return True when a source should be queried for *target_location*.

    An empty target matches every source. Otherwise the target must mention a
    French alias and the source must be tagged with the France region.

    Examples:
        >>> is_location_relevant("france", "")
        True
        >>> is_location_relevant("france", "Lyon 3e")
        True
        >>> is_location_relevant("belgium", "Paris")
        False
    """
    if not target_location:
        return True
    location = target_location.lower()
    region = (source_region or "").lower()
    return region == FRANCE_REGION and any(alias in location for alias in FRENCH_LOCATION_ALIASES)


__all__ = ["DEFAULT_SOURCES", "get_sources", "build_sources", "is_location_relevant"]
