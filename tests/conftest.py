"""Shared fixtures for integration tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from placita.foundation.application import (
    NotificationCenter,
    PreferencesEnvironment,
    RegisteredDefaults,
)
from placita.infra.persistence import DatabaseManager, SqlPreferencesBackend

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

APPLICATION_ID = "com.example.editor"


@pytest.fixture()
def database_url(tmp_path: Path) -> str:
    """SQLite database file private to one test."""
    return f"sqlite:///{tmp_path / 'preferences.sqlite3'}"


@pytest.fixture()
def launch(database_url: str) -> Iterator[Callable[..., PreferencesEnvironment]]:
    """Start a simulated process on the shared database.

    Every call builds a fresh backend, registration domain and notification
    center, as a newly started application would. Backends are closed at
    teardown.
    """
    backends: list[SqlPreferencesBackend] = []

    def factory(
        application_id: str = APPLICATION_ID,
        *,
        arguments: dict[str, object] | None = None,
        archive_file_references: bool = False,
    ) -> PreferencesEnvironment:
        backend = SqlPreferencesBackend(DatabaseManager(database_url))
        backends.append(backend)
        return PreferencesEnvironment(
            backend=backend,
            application_id=application_id,
            registered_defaults=RegisteredDefaults(),
            notifications=NotificationCenter(),
            arguments=arguments or {},
            archive_file_references=archive_file_references,
        )

    yield factory
    for backend in backends:
        backend.close()
