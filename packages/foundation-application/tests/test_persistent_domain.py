"""Unit tests for placita.foundation.application.persistent_domain."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path, PurePosixPath
from typing import Any
from unittest.mock import MagicMock

import pytest

from placita.foundation.application.persistent_domain import (
    PersistentDomainAdapter,
    to_primitive,
    to_value,
)
from placita.foundation.domain.exceptions import StorageBackendError
from placita.foundation.domain.values import (
    INT64_MAX,
    ArrayValue,
    BooleanValue,
    DataValue,
    DateValue,
    DictionaryValue,
    FloatValue,
    IntegerValue,
    PathValue,
    StringValue,
    to_canonical,
)

APPLICATION_ID = "com.example.editor"


class TestTranslation:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("primitive", "expected"),
        [
            ("x", StringValue(value="x")),
            (True, BooleanValue(value=True)),
            (3, IntegerValue(value=3)),
            (2.5, FloatValue(value=2.5)),
            (b"ab", DataValue(value=b"ab")),
            (bytearray(b"ab"), DataValue(value=b"ab")),
            (PurePosixPath("/srv/data"), PathValue(value="/srv/data")),
        ],
    )
    def test_scalar_primitives(self, primitive: Any, expected: Any) -> None:
        assert to_value(primitive) == expected

    @pytest.mark.unit
    def test_date_primitive(self) -> None:
        moment = datetime(2024, 1, 2, tzinfo=UTC)
        assert to_value(moment) == DateValue(value=moment)

    @pytest.mark.unit
    def test_containers(self) -> None:
        value = to_value({"list": [1, "a"], "nested": {"flag": False}})
        assert isinstance(value, DictionaryValue)
        assert isinstance(value.value["list"], ArrayValue)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "primitive",
        [frozenset({1}), INT64_MAX + 1, {1: "non-text key"}, [1, object()]],
    )
    def test_unrecognized_primitives_pass_through(self, primitive: Any) -> None:
        assert to_value(primitive) is primitive

    @pytest.mark.unit
    def test_to_primitive(self) -> None:
        native = {"list": [1, "a"], "blob": b"x"}
        assert to_primitive(to_canonical(native)) == native
        assert to_primitive(PathValue(value="/srv")) == Path("/srv")


def _adapter(backend: Any, **kwargs: Any) -> PersistentDomainAdapter:
    return PersistentDomainAdapter(backend, APPLICATION_ID, **kwargs)


class TestPersistentDomainAdapter:
    @pytest.mark.unit
    def test_get_addresses_application_identity(self) -> None:
        backend = MagicMock()
        backend.get_app_value.return_value = "dark"
        assert _adapter(backend).get("Theme") == StringValue(value="dark")
        backend.get_app_value.assert_called_once_with("Theme", APPLICATION_ID)

    @pytest.mark.unit
    def test_get_addresses_suite(self) -> None:
        backend = MagicMock()
        backend.get_app_value.return_value = None
        assert _adapter(backend).get("Theme", "group.shared") is None
        backend.get_app_value.assert_called_once_with("Theme", "group.shared")

    @pytest.mark.unit
    def test_set_and_remove(self) -> None:
        backend = MagicMock()
        adapter = _adapter(backend)
        adapter.set("List", to_canonical([1, 2]))
        adapter.remove("List")
        assert backend.set_app_value.call_args_list[0].args == ("List", [1, 2], APPLICATION_ID)
        assert backend.set_app_value.call_args_list[1].args == ("List", None, APPLICATION_ID)

    @pytest.mark.unit
    def test_enumerate(self) -> None:
        backend = MagicMock()
        backend.copy_multiple.return_value = {"A": 1}
        assert _adapter(backend).enumerate(search_list=True) == {"A": IntegerValue(value=1)}
        backend.copy_multiple.assert_called_once_with(APPLICATION_ID, search_list=True)

    @pytest.mark.unit
    def test_read_failures_degrade(self) -> None:
        backend = MagicMock()
        backend.get_app_value.side_effect = StorageBackendError("get", "offline")
        backend.copy_multiple.side_effect = StorageBackendError("copy", "offline")
        adapter = _adapter(backend)
        assert adapter.get("Theme") is None
        assert adapter.enumerate() == {}

    @pytest.mark.unit
    def test_strict_enumerate_propagates_failures(self) -> None:
        backend = MagicMock()
        backend.copy_multiple.side_effect = StorageBackendError("copy", "offline")
        with pytest.raises(StorageBackendError):
            _adapter(backend).enumerate("group.shared", strict=True)

    @pytest.mark.unit
    def test_synchronize(self) -> None:
        backend = MagicMock()
        backend.synchronize_app.return_value = True
        assert _adapter(backend).synchronize("group.shared") is True
        backend.synchronize_app.assert_called_once_with("group.shared")

    @pytest.mark.unit
    def test_synchronize_failures(self) -> None:
        backend = MagicMock()
        backend.synchronize_app.return_value = False
        assert _adapter(backend).synchronize() is False
        backend.synchronize_app.side_effect = StorageBackendError("flush", "offline")
        assert _adapter(backend).synchronize() is False

    @pytest.mark.unit
    def test_write_failures_propagate(self) -> None:
        backend = MagicMock()
        backend.set_app_value.side_effect = StorageBackendError("encode", "bad value")
        with pytest.raises(StorageBackendError):
            _adapter(backend).set("Theme", StringValue(value="dark"))

    @pytest.mark.unit
    def test_suites_attach_to_application_identity(self) -> None:
        backend = MagicMock()
        adapter = _adapter(backend)
        adapter.add_suite("group.shared")
        adapter.remove_suite("group.shared")
        backend.add_suite.assert_called_once_with(APPLICATION_ID, "group.shared")
        backend.remove_suite.assert_called_once_with(APPLICATION_ID, "group.shared")

    @pytest.mark.unit
    def test_capability_flag(self) -> None:
        backend = MagicMock()
        assert _adapter(backend).archives_file_references is False
        assert _adapter(backend, archive_file_references=True).archives_file_references is True
        assert _adapter(backend).application_id == APPLICATION_ID
