"""
Search command implementation.
Loads configuration, runs one ranking pass over all sources and renders the
result for the terminal or as JSON for the response-generation step.
"""

import json
import logging
from typing import List, Optional

from ..core.config import ConfigManager
from ..core.models import AnalysisProgress, FeedItem
from ..processors.aggregator import FeedAggregator

logger = logging.getLogger(__name__)


def _log_progress(progress: AnalysisProgress) -> None:
    logger.info(f"[{progress.percent:3d}%] {progress.step}")


def run(config_path: Optional[str], keyword: str, location: str = "") -> List[FeedItem]:
    """Run the ranking pipeline with settings and sources from *config_path*.

    Raises:
        ValueError: If the configuration is invalid
    """
    logger.info(f"Starting search for '{keyword}' (location: '{location or '-'}')")

    config_manager = ConfigManager(config_path)
    if not config_manager.validate_config():
        raise ValueError("Invalid configuration. Run 'freelance-radar status' for details.")

    aggregator = FeedAggregator(
        sources=config_manager.get_sources(),
        settings=config_manager.get_settings(),
    )
    items = aggregator.rank(keyword, location, progress=_log_progress)
    logger.info(f"Search completed: {len(items)} items")
    return items


def to_json(items: List[FeedItem]) -> str:
    """Serialize ranked items for the response-generation step."""
    return json.dumps([item.to_dict() for item in items], ensure_ascii=False, indent=2)


def to_text(items: List[FeedItem]) -> str:
    """Render ranked items as a plain-text list."""
    if not items:
        return "Aucun résultat pertinent trouvé."
    blocks = []
    for index, item in enumerate(items, start=1):
        header = f"{index}. {item.title or '(sans titre)'}"
        meta = f"   {item.source_name} | {item.formatted_age} | score {item.relevance_score or 0:.2f}"
        lines = [header, meta]
        if item.link:
            lines.append(f"   {item.link}")
        if item.cleaned_content:
            lines.append(f"   {item.cleaned_content}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)
