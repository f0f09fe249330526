"""Centralized logging configuration for the ``spending_insights`` package.

- ``configure_logging(...)`` attaches one ``StreamHandler`` to the package
  root logger (``"spending_insights"``). Entrypoints (the CLI, or a host
  application) call it once at startup.
- ``get_logger(name)`` hands out child loggers. Until logging is configured
  the package root carries a ``NullHandler`` so library use stays silent.

Library modules never attach handlers of their own.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

from .config import log_level_from_env

_PKG_LOGGER_NAME = "spending_insights"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if level is None:
        level = log_level_from_env()
        if level is None:
            return logging.INFO
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelNamesMapping().get(name)
    return numeric if numeric is not None else logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Configure the package root logger exactly once.

    ``level`` falls back to ``SPENDING_INSIGHTS_LOG_LEVEL`` and then to
    ``INFO``. Subsequent calls are no-ops.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)``, keeping the package root quiet until configured."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger"]
