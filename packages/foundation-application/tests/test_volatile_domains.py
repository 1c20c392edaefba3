"""Unit tests for placita.foundation.application.volatile_domains."""

from __future__ import annotations

import threading

import pytest

from placita.foundation.application.volatile_domains import (
    RegisteredDefaults,
    VolatileDomainTable,
    get_registered_defaults,
)
from placita.foundation.domain.exceptions import UnsupportedValueTypeError
from placita.foundation.domain.values import IntegerValue, StringValue


class TestRegisteredDefaults:
    @pytest.mark.unit
    def test_register_and_get(self) -> None:
        defaults = RegisteredDefaults()
        defaults.register({"Theme": "light", "FontSize": 12})
        assert defaults.get("Theme") == StringValue(value="light")
        assert defaults.get("FontSize") == IntegerValue(value=12)
        assert defaults.get("Missing") is None
        assert len(defaults) == 2

    @pytest.mark.unit
    def test_new_keys_overwrite(self) -> None:
        defaults = RegisteredDefaults()
        defaults.register({"Theme": "light"})
        defaults.register({"Theme": "dark"})
        assert defaults.get("Theme") == StringValue(value="dark")

    @pytest.mark.unit
    def test_atomic_registration(self) -> None:
        defaults = RegisteredDefaults()
        with pytest.raises(UnsupportedValueTypeError):
            defaults.register({"Good": 1, "Bad": {1, 2}})
        assert len(defaults) == 0

    @pytest.mark.unit
    def test_snapshot_is_a_copy(self) -> None:
        defaults = RegisteredDefaults()
        defaults.register({"A": 1})
        snapshot = defaults.snapshot()
        snapshot["B"] = IntegerValue(value=2)
        assert defaults.get("B") is None

    @pytest.mark.unit
    def test_clear(self) -> None:
        defaults = RegisteredDefaults()
        defaults.register({"A": 1})
        defaults.clear()
        assert defaults.snapshot() == {}

    @pytest.mark.unit
    def test_singleton(self) -> None:
        get_registered_defaults.cache_clear()
        try:
            assert get_registered_defaults() is get_registered_defaults()
        finally:
            get_registered_defaults.cache_clear()


class TestVolatileDomainTable:
    @pytest.mark.unit
    def test_absent_domain_is_empty(self) -> None:
        table = VolatileDomainTable()
        assert table.get_domain("Nope") == {}
        assert table.get_value("Nope", "key") is None

    @pytest.mark.unit
    def test_set_merges(self) -> None:
        table = VolatileDomainTable()
        table.set_domain("Scratch", {"a": 1})
        table.set_domain("Scratch", {"b": "two"})
        assert table.get_domain("Scratch") == {
            "a": IntegerValue(value=1),
            "b": StringValue(value="two"),
        }
        assert table.domain_names() == ["Scratch"]

    @pytest.mark.unit
    def test_unsupported_value_leaves_domain_unchanged(self) -> None:
        table = VolatileDomainTable()
        table.set_domain("Scratch", {"a": 1})
        with pytest.raises(UnsupportedValueTypeError):
            table.set_domain("Scratch", {"a": 2, "b": object()})
        assert table.get_value("Scratch", "a") == IntegerValue(value=1)

    @pytest.mark.unit
    def test_remove(self) -> None:
        table = VolatileDomainTable()
        table.set_domain("Scratch", {"a": 1})
        table.remove_domain("Scratch")
        table.remove_domain("Scratch")
        assert table.domain_names() == []

    @pytest.mark.unit
    def test_concurrent_writers_on_distinct_domains(self) -> None:
        table = VolatileDomainTable()
        writers = 8
        writes_per_writer = 200
        barrier = threading.Barrier(writers)

        def write(index: int) -> None:
            barrier.wait()
            for n in range(writes_per_writer):
                table.set_domain(f"domain-{index}", {f"key-{n}": n})
                table.get_domain(f"domain-{(index + 1) % writers}")

        threads = [threading.Thread(target=write, args=(i,)) for i in range(writers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)
            assert not thread.is_alive()

        for index in range(writers):
            assert len(table.get_domain(f"domain-{index}")) == writes_per_writer

    @pytest.mark.unit
    def test_concurrent_registration(self) -> None:
        defaults = RegisteredDefaults()
        barrier = threading.Barrier(4)

        def register(index: int) -> None:
            barrier.wait()
            for n in range(100):
                defaults.register({f"{index}-{n}": n})

        threads = [threading.Thread(target=register, args=(i,)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert len(defaults) == 400
