"""Integration tests: one store shared by many threads."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

import pytest

from placita.foundation.application import Preferences

if TYPE_CHECKING:
    from collections.abc import Callable

    from placita.foundation.application import PreferencesEnvironment

WORKERS = 8
KEYS_PER_WORKER = 25


@pytest.mark.integration
class TestConcurrentAccess:
    def test_parallel_writers_all_persist(
        self, launch: Callable[..., PreferencesEnvironment]
    ) -> None:
        prefs = Preferences(environment=launch())
        start = threading.Barrier(WORKERS)

        def write(worker: int) -> None:
            start.wait()
            for index in range(KEYS_PER_WORKER):
                prefs.set_int(f"worker{worker}.key{index}", worker * 1000 + index)

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            list(pool.map(write, range(WORKERS)))

        assert prefs.synchronize() is True
        stored = Preferences(environment=launch()).dictionary_representation()
        assert len(stored) == WORKERS * KEYS_PER_WORKER
        assert stored["worker3.key7"] == 3007

    def test_readers_see_whole_values(
        self, launch: Callable[..., PreferencesEnvironment]
    ) -> None:
        prefs = Preferences(environment=launch())
        candidates = [["a"] * size for size in range(1, 6)]
        prefs.set("List", candidates[0])
        start = threading.Barrier(2)
        observed: list[list[str] | None] = []

        def write() -> None:
            start.wait()
            for _ in range(50):
                for candidate in candidates:
                    prefs.set("List", candidate)

        def read() -> None:
            start.wait()
            for _ in range(250):
                observed.append(prefs.get_string_array("List"))

        threads = [threading.Thread(target=write), threading.Thread(target=read)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert observed
        assert all(value in candidates for value in observed)

    def test_registered_defaults_shared_across_threads(
        self, launch: Callable[..., PreferencesEnvironment]
    ) -> None:
        environment = launch()
        stores = [Preferences(environment=environment) for _ in range(WORKERS)]

        def register(worker: int) -> None:
            stores[worker].register_defaults({f"Default{worker}": worker})

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            list(pool.map(register, range(WORKERS)))

        for store in stores:
            assert all(store.get_int(f"Default{w}") == w for w in range(WORKERS))
