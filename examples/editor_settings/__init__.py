"""Editor Settings: minimal example consumer of the Placita preference store.

An editor keeps its own options in the application identity and shares a
colour theme with companion tools through a suite.

Modules:
    settings: EditorSettings facade, EDITOR_DEFAULTS, THEME_SUITE
"""

from .settings import EDITOR_DEFAULTS, THEME_SUITE, EditorSettings

__all__ = ["EDITOR_DEFAULTS", "THEME_SUITE", "EditorSettings"]
