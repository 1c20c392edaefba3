"""Editor settings built on :class:`Preferences`.

Usage::

    from examples.editor_settings import EditorSettings
    from placita.infra.persistence import get_standard_environment

    settings = EditorSettings(get_standard_environment())
    settings.font_size = 14
    settings.save()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from placita.foundation.application import Preferences
from placita.foundation.domain import ValidationError

if TYPE_CHECKING:
    from pathlib import Path

    from placita.foundation.application import PreferencesEnvironment

THEME_SUITE = "group.example.themes"

EDITOR_DEFAULTS = {
    "FontSize": 12,
    "WrapLines": True,
    "TabWidth": 4,
    "RecentFiles": [],
}

_MAX_RECENT_FILES = 5


class EditorSettings:
    """Typed view of the editor's preferences.

    Registers :data:`EDITOR_DEFAULTS` and attaches the shared theme suite to
    the application's search path, so a theme chosen in any companion tool
    is visible here unless the editor overrides it.
    """

    def __init__(self, environment: PreferencesEnvironment) -> None:
        self._prefs = Preferences(environment=environment)
        self._themes = Preferences(THEME_SUITE, environment=environment)
        self._prefs.register_defaults(EDITOR_DEFAULTS)
        self._prefs.add_suite(THEME_SUITE)

    @property
    def preferences(self) -> Preferences:
        return self._prefs

    @property
    def font_size(self) -> int:
        return self._prefs.get_int("FontSize")

    @font_size.setter
    def font_size(self, size: int) -> None:
        if size <= 0:
            raise ValidationError("font_size", "must be positive")
        self._prefs.set_int("FontSize", size)

    @property
    def wrap_lines(self) -> bool:
        return self._prefs.get_bool("WrapLines")

    @wrap_lines.setter
    def wrap_lines(self, enabled: bool) -> None:
        self._prefs.set_bool("WrapLines", enabled)

    @property
    def theme(self) -> str | None:
        return self._prefs.get_string("Theme")

    def share_theme(self, theme: str) -> None:
        """Store ``theme`` in the suite shared with companion tools."""
        self._themes.set("Theme", theme)

    def recent_files(self) -> list[str]:
        return self._prefs.get_string_array("RecentFiles") or []

    def open_file(self, path: Path) -> None:
        """Move ``path`` to the front of the recent-files list."""
        entry = str(path)
        recent = [item for item in self.recent_files() if item != entry]
        self._prefs.set("RecentFiles", [entry, *recent][:_MAX_RECENT_FILES])
        self._prefs.set_url("LastOpened", path)

    def last_opened(self) -> Path | None:
        return self._prefs.get_url("LastOpened")

    def reset(self) -> None:
        """Forget the editor's own values; registered defaults apply again."""
        for key in EDITOR_DEFAULTS:
            self._prefs.remove(key)

    def save(self) -> bool:
        return self._prefs.synchronize() and self._themes.synchronize()
