"""Shared fixtures for preference store unit tests."""

from __future__ import annotations

from typing import Any

import pytest

from placita.foundation.application.notifications import NotificationCenter
from placita.foundation.application.preferences import Preferences, PreferencesEnvironment
from placita.foundation.application.volatile_domains import RegisteredDefaults
from placita.foundation.domain.domain_names import GLOBAL_DOMAIN
from placita.foundation.domain.exceptions import StorageBackendError

APPLICATION_ID = "com.example.editor"


class FakeBackend:
    """Dictionary backend with a switchable outage."""

    def __init__(self) -> None:
        self.domains: dict[str, dict[str, Any]] = {}
        self.suites: dict[str, list[str]] = {}
        self.synchronized: list[str] = []
        self.offline = False
        self.sync_result = True

    def _check(self, operation: str) -> None:
        if self.offline:
            raise StorageBackendError(operation, "backend offline")

    def _path(self, application_id: str) -> list[str]:
        return [application_id, *self.suites.get(application_id, []), GLOBAL_DOMAIN]

    def get_app_value(self, key: str, application_id: str) -> Any | None:
        self._check("get")
        for name in self._path(application_id):
            if key in self.domains.get(name, {}):
                return self.domains[name][key]
        return None

    def set_app_value(self, key: str, value: Any | None, application_id: str) -> None:
        if value is None:
            self.domains.get(application_id, {}).pop(key, None)
        else:
            self.domains.setdefault(application_id, {})[key] = value

    def copy_multiple(
        self,
        application_id: str,
        *,
        keys: Any = None,
        search_list: bool = False,
    ) -> dict[str, Any]:
        self._check("copy")
        names = self._path(application_id) if search_list else [application_id]
        merged: dict[str, Any] = {}
        for name in reversed(names):
            merged.update(self.domains.get(name, {}))
        return merged

    def synchronize_app(self, application_id: str) -> bool:
        self._check("synchronize")
        self.synchronized.append(application_id)
        return self.sync_result

    def add_suite(self, application_id: str, suite_name: str) -> None:
        self.suites.setdefault(application_id, []).append(suite_name)

    def remove_suite(self, application_id: str, suite_name: str) -> None:
        if suite_name in self.suites.get(application_id, []):
            self.suites[application_id].remove(suite_name)


class RecordingSink:
    """Notification sink that remembers every post."""

    def __init__(self) -> None:
        self.posts: list[tuple[str, object]] = []

    def post(self, name: str, source: object) -> None:
        self.posts.append((name, source))


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def registered() -> RegisteredDefaults:
    return RegisteredDefaults()


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def environment(
    backend: FakeBackend,
    registered: RegisteredDefaults,
    sink: RecordingSink,
) -> PreferencesEnvironment:
    """Isolated environment with no launch arguments."""
    return PreferencesEnvironment(
        backend=backend,
        application_id=APPLICATION_ID,
        registered_defaults=registered,
        notifications=sink,
        arguments={},
    )


@pytest.fixture()
def prefs(environment: PreferencesEnvironment) -> Preferences:
    return Preferences(environment=environment)


@pytest.fixture()
def center() -> NotificationCenter:
    return NotificationCenter()
