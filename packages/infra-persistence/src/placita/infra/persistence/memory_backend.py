"""Thread-safe in-memory preferences backend.

Implements :class:`PreferencesBackendPort` over plain dictionaries. Nothing
survives the process; ``synchronize_app`` always succeeds. Used for tests,
for sandboxed runs (``PLACITA_BACKEND=memory``), and as the write-back cache
of :class:`SqlPreferencesBackend`.

Search path for an application identity, highest priority first::

    identity -> attached suites (attach order) -> placita.GlobalDomain
"""

from __future__ import annotations

import copy
import threading
from typing import TYPE_CHECKING, Any

from placita.foundation.domain.domain_names import GLOBAL_DOMAIN

if TYPE_CHECKING:
    from collections.abc import Iterable


class InMemoryPreferencesBackend:
    """Dictionary-backed preference storage.

    Values are deep-copied on the way in and on the way out, so callers
    never share mutable containers with the store.
    """

    def __init__(self) -> None:
        self._domains: dict[str, dict[str, Any]] = {}
        self._suites: dict[str, list[str]] = {}
        self._lock = threading.RLock()

    # -- hook for subclasses ------------------------------------------------

    def _domain(self, name: str) -> dict[str, Any]:
        """Return the live mapping of ``name`` (empty if absent). Lock held."""
        return self._domains.get(name, {})

    # -- search path ---------------------------------------------------------

    def search_path(self, application_id: str) -> list[str]:
        """Return the domains searched for ``application_id``, highest first."""
        with self._lock:
            path = [application_id]
            for suite in self._suites.get(application_id, []):
                if suite not in path:
                    path.append(suite)
            if GLOBAL_DOMAIN not in path:
                path.append(GLOBAL_DOMAIN)
            return path

    # -- PreferencesBackendPort ----------------------------------------------

    def get_app_value(self, key: str, application_id: str) -> Any | None:
        with self._lock:
            for name in self.search_path(application_id):
                domain = self._domain(name)
                if key in domain:
                    return copy.deepcopy(domain[key])
            return None

    def set_app_value(self, key: str, value: Any | None, application_id: str) -> None:
        with self._lock:
            if value is None:
                self._domains.get(application_id, {}).pop(key, None)
            else:
                self._domains.setdefault(application_id, {})[key] = copy.deepcopy(value)

    def copy_multiple(
        self,
        application_id: str,
        *,
        keys: Iterable[str] | None = None,
        search_list: bool = False,
    ) -> dict[str, Any]:
        with self._lock:
            names = self.search_path(application_id) if search_list else [application_id]
            merged: dict[str, Any] = {}
            # Lowest priority first so that later domains win.
            for name in reversed(names):
                merged.update(self._domain(name))
            if keys is not None:
                wanted = set(keys)
                merged = {key: value for key, value in merged.items() if key in wanted}
            return copy.deepcopy(merged)

    def synchronize_app(self, application_id: str) -> bool:
        return True

    def add_suite(self, application_id: str, suite_name: str) -> None:
        if suite_name == application_id:
            return
        with self._lock:
            suites = self._suites.setdefault(application_id, [])
            if suite_name not in suites:
                suites.append(suite_name)

    def remove_suite(self, application_id: str, suite_name: str) -> None:
        with self._lock:
            suites = self._suites.get(application_id, [])
            if suite_name in suites:
                suites.remove(suite_name)

    # -- lifecycle -----------------------------------------------------------

    def close(self) -> None:
        """Release resources held by the backend (nothing to release here)."""
