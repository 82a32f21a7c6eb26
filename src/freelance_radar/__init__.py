from __future__ import annotations

from typing import Callable, List, Optional

from .core.config import ConfigManager
from .core.models import AnalysisProgress, FeedItem, Source
from .processors.aggregator import FeedAggregator

__version__ = "0.1.0"

__all__ = [
    'rank',
    'FeedAggregator',
    'FeedItem',
    'Source',
    'AnalysisProgress',
]


def rank(
    keyword: str,
    location: str = "",
    *,
    config_path: Optional[str] = None,
    progress: Optional[Callable[[AnalysisProgress], None]] = None,
) -> List[FeedItem]:
    """Return the top-ranked help requests for *keyword* across all sources.

    Args:
        keyword: Search keyword (whitespace-separated terms)
        location: Optional location; empty disables geographic filtering
        config_path: Optional YAML config; built-in sources and defaults when omitted
        progress: Optional callback receiving AnalysisProgress milestones
    """
    if config_path:
        config_manager = ConfigManager(config_path)
        aggregator = FeedAggregator(
            sources=config_manager.get_sources(),
            settings=config_manager.get_settings(),
        )
    else:
        aggregator = FeedAggregator()
    return aggregator.rank(keyword, location, progress=progress)
