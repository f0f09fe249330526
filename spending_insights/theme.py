"""Dark-mode preference with pluggable persistence.

:class:`ThemeSettings` is owned by the application entrypoint and handed to
whatever renders output. Persistence goes through the small
:class:`PreferenceStore` protocol so the backing store can be a JSON file, an
in-memory dict (tests), or anything else with ``get``/``set``.
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from .logging_setup import get_logger

THEME_KEY = "theme-mode"
DARK = "dark"
LIGHT = "light"

_logger = get_logger("spending_insights.theme")


class PreferenceStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryPreferenceStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFilePreferenceStore:
    """Preferences kept as a flat JSON object of strings.

    A missing or corrupt file reads as empty. Writes go to ``<path>.tmp`` and
    are moved into place with ``os.replace``.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            _logger.warning("Ignoring unreadable preferences file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            _logger.warning("Ignoring preferences file %s: expected a JSON object", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
        os.replace(tmp, self.path)


def terminal_prefers_dark() -> bool:
    """Guess the terminal background from ``COLORFGBG`` (``"fg;bg"``).

    Background indices 0-6 and 8 are the dark ANSI colors. Anything else,
    including an unset variable, reads as light.
    """

    value = os.getenv("COLORFGBG", "")
    bg = value.rsplit(";", 1)[-1].strip()
    if not bg.isdigit():
        return False
    return int(bg) in {0, 1, 2, 3, 4, 5, 6, 8}


class ThemeSettings:
    """Boolean dark-mode flag backed by a :class:`PreferenceStore`.

    The stored value wins. Without one, ``system_prefers_dark`` is asked once
    and the answer is kept for the lifetime of the object (it is not written
    back until the user changes the flag).
    """

    def __init__(
        self,
        store: PreferenceStore,
        *,
        system_prefers_dark: Callable[[], bool] = terminal_prefers_dark,
    ) -> None:
        self._store = store
        self._system_prefers_dark = system_prefers_dark
        self._is_dark: bool | None = None

    @property
    def is_dark(self) -> bool:
        if self._is_dark is None:
            stored = self._store.get(THEME_KEY)
            if stored:
                self._is_dark = stored == DARK
            else:
                self._is_dark = bool(self._system_prefers_dark())
        return self._is_dark

    @property
    def mode(self) -> str:
        return DARK if self.is_dark else LIGHT

    def set_dark(self, dark: bool) -> None:
        self._is_dark = dark
        self._store.set(THEME_KEY, DARK if dark else LIGHT)
        _logger.debug("Theme set to %s", self.mode)

    def toggle(self) -> bool:
        """Flip the flag, persist it, and return the new value."""

        self.set_dark(not self.is_dark)
        return self.is_dark


__all__ = [
    "DARK",
    "LIGHT",
    "THEME_KEY",
    "InMemoryPreferenceStore",
    "JsonFilePreferenceStore",
    "PreferenceStore",
    "ThemeSettings",
    "terminal_prefers_dark",
]
