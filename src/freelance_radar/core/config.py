"""Configuration management for the YAML config file."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .http_client import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from .models import Source
from .paths import get_data_dir
from .sources import build_sources, get_sources
from .text_utils import PREVIEW_LENGTH

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = get_data_dir() / "config"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.yaml"

DEFAULT_MAX_RESULTS = 5
DEFAULT_TIME_WINDOW_DAYS = 90
DEFAULT_MAX_WORKERS = 8

_DEFAULT_CONFIG_TEMPLATE = """# Auto-generated default configuration for freelance-radar
http:
  timeout: 15
  # Prefix every feed URL with a relay (CORS proxy), e.g. "https://api.allorigins.win/raw?url="
  relay_url: ""
  user_agent: "freelance-radar/0.1"
  max_workers: 8

ranking:
  max_results: 5
  time_window_days: 90
  preview_length: 300

# Leave empty to use the built-in French freelance sources. Example entry:
#   - url: "https://community.malt.com/feed"
#     name: "Malt Community"
#     weight: 1.0
#     type: "rss"
#     region: "france"
sources: []
"""


@dataclass(frozen=True)
class SearchSettings:
    """Tunables for one ranking pass."""

    timeout: float = DEFAULT_TIMEOUT
    relay_url: str = ""
    user_agent: str = DEFAULT_USER_AGENT
    max_workers: int = DEFAULT_MAX_WORKERS
    max_results: int = DEFAULT_MAX_RESULTS
    time_window_days: int = DEFAULT_TIME_WINDOW_DAYS
    preview_length: int = PREVIEW_LENGTH


def _write_template(path: Path, content: str) -> None:
    """Write templated YAML content to disk with a trailing newline."""
    path.parent.mkdir(parents=True, exist_ok=True)
    text = content if content.endswith("\n") else content + "\n"
    path.write_text(text, encoding="utf-8")


def _positive_number(section: Dict[str, Any], key: str, label: str) -> bool:
    value = section.get(key)
    if value is None:
        return True
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        logger.error(f"'{label}.{key}' must be a positive number, got {value!r}")
        return False
    return True


class ConfigManager:
    """Manages loading and validation of the YAML configuration file."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the manager and ensure a baseline config file exists."""
        path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        if not path.is_absolute():
            path = path.resolve()
        self.config_path = str(path)
        self._config = None
        self._ensure_default_config()

    def _ensure_default_config(self) -> None:
        """Create the default configuration file if it is missing."""
        config_file = Path(self.config_path)
        if not config_file.exists():
            _write_template(config_file, _DEFAULT_CONFIG_TEMPLATE)
            logger.info("Created default config.yaml at %s", config_file)

    def load_config(self) -> Dict[str, Any]:
        """Load the main configuration file."""
        if self._config is None:
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    self._config = yaml.safe_load(f) or {}
                logger.info(f"Loaded configuration from {self.config_path}")
            except Exception as e:
                logger.error(f"Failed to load config from {self.config_path}: {e}")
                raise

        return self._config

    def get_settings(self) -> SearchSettings:
        """Build search settings from the ``http`` and ``ranking`` sections."""
        config = self.load_config()
        http_cfg = config.get('http') or {}
        ranking_cfg = config.get('ranking') or {}
        defaults = SearchSettings()
        return SearchSettings(
            timeout=float(http_cfg.get('timeout', defaults.timeout)),
            relay_url=str(http_cfg.get('relay_url') or ""),
            user_agent=str(http_cfg.get('user_agent') or defaults.user_agent),
            max_workers=int(http_cfg.get('max_workers', defaults.max_workers)),
            max_results=int(ranking_cfg.get('max_results', defaults.max_results)),
            time_window_days=int(ranking_cfg.get('time_window_days', defaults.time_window_days)),
            preview_length=int(ranking_cfg.get('preview_length', defaults.preview_length)),
        )

    def get_sources(self) -> Tuple[Source, ...]:
        """Return configured sources, or the built-in registry when none are listed.

        Raises:
            ValueError: If a configured source entry is malformed
        """
        entries = self.load_config().get('sources') or []
        if not entries:
            return get_sources()
        return build_sources(entries)

    def validate_config(self) -> bool:
        """Validate the configuration file."""
        try:
            config = self.load_config()
            if not isinstance(config, dict):
                logger.error("Config root must be a mapping")
                return False

            for section in ('http', 'ranking'):
                value = config.get(section)
                if value is not None and not isinstance(value, dict):
                    logger.error(f"Section '{section}' must be a mapping")
                    return False

            http_cfg = config.get('http') or {}
            ranking_cfg = config.get('ranking') or {}
            checks = [
                _positive_number(http_cfg, 'timeout', 'http'),
                _positive_number(http_cfg, 'max_workers', 'http'),
                _positive_number(ranking_cfg, 'max_results', 'ranking'),
                _positive_number(ranking_cfg, 'time_window_days', 'ranking'),
                _positive_number(ranking_cfg, 'preview_length', 'ranking'),
            ]
            if not all(checks):
                return False

            sources = config.get('sources')
            if sources is not None and not isinstance(sources, list):
                logger.error("'sources' must be a list of source mappings")
                return False
            # Raises ValueError on malformed entries
            self.get_sources()

            logger.info("Configuration validation passed")
            return True

        except Exception as e:
            logger.error(f"Configuration validation failed: {e}")
            return False


__all__ = [
    "ConfigManager",
    "SearchSettings",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_CONFIG_DIR",
]
