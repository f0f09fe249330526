"""Pytest configuration for test isolation.

The theme preference is persisted under ``SPENDING_INSIGHTS_CONFIG_DIR``
(default ``~/.config/spending_insights``). Each test gets its own directory so
no test reads a preference written by another (or by the developer's real
config). ``COLORFGBG`` is cleared so the terminal-background fallback is
deterministic.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolate_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_root = tmp_path / "config"
    config_root.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("SPENDING_INSIGHTS_CONFIG_DIR", os.fspath(config_root))
    monkeypatch.delenv("COLORFGBG", raising=False)
