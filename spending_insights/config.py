"""Environment-backed settings.

Values are read lazily on each call so tests (and the CLI after loading
``.env``) see the current environment.
"""

from __future__ import annotations

import os
from pathlib import Path

LOG_LEVEL_ENV = "SPENDING_INSIGHTS_LOG_LEVEL"
CONFIG_DIR_ENV = "SPENDING_INSIGHTS_CONFIG_DIR"
PREFERENCES_FILENAME = "preferences.json"


def log_level_from_env() -> str | None:
    value = os.getenv(LOG_LEVEL_ENV)
    if value and value.strip():
        return value.strip()
    return None


def get_config_dir() -> Path:
    """Return the directory holding persisted preferences.

    Default: ``~/.config/spending_insights``.
    Override: ``SPENDING_INSIGHTS_CONFIG_DIR`` (absolute or relative).
    """

    root = os.getenv(CONFIG_DIR_ENV)
    if root and root.strip():
        return Path(root).expanduser().resolve()
    return (Path.home() / ".config" / "spending_insights").resolve()


def get_preferences_path() -> Path:
    return get_config_dir() / PREFERENCES_FILENAME


__all__ = [
    "CONFIG_DIR_ENV",
    "LOG_LEVEL_ENV",
    "get_config_dir",
    "get_preferences_path",
    "log_level_from_env",
]
