"""Unit tests for placita.infra.persistence.memory_backend."""

from __future__ import annotations

import pytest

from placita.foundation.domain.domain_names import GLOBAL_DOMAIN
from placita.foundation.domain.ports import PreferencesBackendPort
from placita.infra.persistence.memory_backend import InMemoryPreferencesBackend

APP = "com.example.editor"
SUITE = "group.example.shared"


@pytest.fixture()
def backend() -> InMemoryPreferencesBackend:
    return InMemoryPreferencesBackend()


class TestInMemoryPreferencesBackend:
    @pytest.mark.unit
    def test_conforms_to_port(self, backend: InMemoryPreferencesBackend) -> None:
        assert isinstance(backend, PreferencesBackendPort)

    @pytest.mark.unit
    def test_set_get_delete(self, backend: InMemoryPreferencesBackend) -> None:
        backend.set_app_value("Theme", "dark", APP)
        assert backend.get_app_value("Theme", APP) == "dark"
        backend.set_app_value("Theme", None, APP)
        assert backend.get_app_value("Theme", APP) is None

    @pytest.mark.unit
    def test_delete_missing_key(self, backend: InMemoryPreferencesBackend) -> None:
        backend.set_app_value("Nothing", None, APP)
        assert backend.copy_multiple(APP) == {}

    @pytest.mark.unit
    def test_search_path_order(self, backend: InMemoryPreferencesBackend) -> None:
        backend.set_app_value("Key", "global", GLOBAL_DOMAIN)
        assert backend.get_app_value("Key", APP) == "global"
        backend.add_suite(APP, SUITE)
        backend.set_app_value("Key", "suite", SUITE)
        assert backend.get_app_value("Key", APP) == "suite"
        backend.set_app_value("Key", "own", APP)
        assert backend.get_app_value("Key", APP) == "own"
        assert backend.search_path(APP) == [APP, SUITE, GLOBAL_DOMAIN]

    @pytest.mark.unit
    def test_copy_multiple_is_suite_exclusive_by_default(
        self, backend: InMemoryPreferencesBackend
    ) -> None:
        backend.set_app_value("Own", 1, APP)
        backend.set_app_value("Global", 2, GLOBAL_DOMAIN)
        assert backend.copy_multiple(APP) == {"Own": 1}
        assert backend.copy_multiple(APP, search_list=True) == {"Own": 1, "Global": 2}

    @pytest.mark.unit
    def test_copy_multiple_later_domains_win(self, backend: InMemoryPreferencesBackend) -> None:
        backend.add_suite(APP, SUITE)
        backend.set_app_value("Key", "global", GLOBAL_DOMAIN)
        backend.set_app_value("Key", "suite", SUITE)
        assert backend.copy_multiple(APP, search_list=True) == {"Key": "suite"}
        backend.set_app_value("Key", "own", APP)
        assert backend.copy_multiple(APP, search_list=True) == {"Key": "own"}

    @pytest.mark.unit
    def test_copy_multiple_key_filter(self, backend: InMemoryPreferencesBackend) -> None:
        backend.set_app_value("A", 1, APP)
        backend.set_app_value("B", 2, APP)
        assert backend.copy_multiple(APP, keys=["B", "Missing"]) == {"B": 2}

    @pytest.mark.unit
    def test_values_are_copied(self, backend: InMemoryPreferencesBackend) -> None:
        original = ["a"]
        backend.set_app_value("List", original, APP)
        original.append("mutated")
        fetched = backend.get_app_value("List", APP)
        fetched.append("also mutated")
        assert backend.get_app_value("List", APP) == ["a"]

    @pytest.mark.unit
    def test_suite_management(self, backend: InMemoryPreferencesBackend) -> None:
        backend.add_suite(APP, SUITE)
        backend.add_suite(APP, SUITE)
        backend.add_suite(APP, APP)
        assert backend.search_path(APP) == [APP, SUITE, GLOBAL_DOMAIN]
        backend.remove_suite(APP, SUITE)
        backend.remove_suite(APP, SUITE)
        assert backend.search_path(APP) == [APP, GLOBAL_DOMAIN]

    @pytest.mark.unit
    def test_suites_are_per_application(self, backend: InMemoryPreferencesBackend) -> None:
        backend.add_suite(APP, SUITE)
        assert backend.search_path("com.example.other") == ["com.example.other", GLOBAL_DOMAIN]

    @pytest.mark.unit
    def test_synchronize_always_succeeds(self, backend: InMemoryPreferencesBackend) -> None:
        assert backend.synchronize_app(APP) is True
        backend.close()
