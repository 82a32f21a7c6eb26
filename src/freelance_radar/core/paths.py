"""Utilities for locating the runtime data directory."""

from __future__ import annotations

import os
from pathlib import Path

_ENV_VAR = "FREELANCE_RADAR_DATA_DIR"
_DEFAULT_DIRNAME = ".freelance_radar"
_REPO_ROOT = Path(__file__).resolve().parents[3]


def get_data_dir() -> Path:
    """Return the configured runtime data directory.

    Honors the FREELANCE_RADAR_DATA_DIR environment variable; otherwise defaults
    to ~/.freelance_radar on the current platform.
    """
    override = os.getenv(_ENV_VAR)
    if override is not None:
        cleaned = override.strip()
        if not cleaned:
            return (_REPO_ROOT / _DEFAULT_DIRNAME).resolve()
        candidate = Path(cleaned).expanduser()
        if not candidate.is_absolute():
            candidate = (_REPO_ROOT / candidate).resolve()
        else:
            candidate = candidate.resolve()
        return candidate
    return (Path.home() / _DEFAULT_DIRNAME).resolve()


__all__ = [
    "get_data_dir",
]
