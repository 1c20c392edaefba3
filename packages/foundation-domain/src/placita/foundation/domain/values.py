"""Canonical value model for preference values.

Every accepted preference value is normalized into the ``Value``
discriminated union before it is stored in any domain. The union is closed:
anything that cannot be expressed with these kinds is rejected at the
boundary by :func:`to_canonical`.

Example:
    >>> from placita.foundation.domain.values import from_canonical, to_canonical
    >>> value = to_canonical({"recent": ["a.txt", "b.txt"], "zoom": 1.5})
    >>> value.kind
    'dictionary'
    >>> from_canonical(value)
    {'recent': ['a.txt', 'b.txt'], 'zoom': 1.5}
"""

from __future__ import annotations

import numbers
import os
from collections.abc import Mapping
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from placita.foundation.domain.exceptions import UnsupportedValueTypeError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ValueKind(StrEnum):
    """Closed set of value kinds a preference may hold."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATA = "data"
    DATE = "date"
    PATH = "path"
    ARRAY = "array"
    DICTIONARY = "dictionary"


class _CanonicalValue(BaseModel):
    """Base for canonical value variants (immutable, strictly typed)."""

    model_config = ConfigDict(frozen=True, strict=True)


class StringValue(_CanonicalValue):
    """UTF-8 text."""

    kind: Literal["string"] = "string"
    value: str


class IntegerValue(_CanonicalValue):
    """Signed 64-bit integer."""

    kind: Literal["integer"] = "integer"
    value: int = Field(ge=INT64_MIN, le=INT64_MAX)


class FloatValue(_CanonicalValue):
    """Double-precision float."""

    kind: Literal["float"] = "float"
    value: float


class BooleanValue(_CanonicalValue):
    """Boolean flag."""

    kind: Literal["boolean"] = "boolean"
    value: bool


class DataValue(_CanonicalValue):
    """Opaque byte sequence."""

    kind: Literal["data"] = "data"
    value: bytes


class DateValue(_CanonicalValue):
    """Absolute timestamp."""

    kind: Literal["date"] = "date"
    value: datetime


class PathValue(_CanonicalValue):
    """File-system path reference.

    Only storage backends produce this kind (native path inputs normalize to
    text). It reads back as a :class:`pathlib.Path`.
    """

    kind: Literal["path"] = "path"
    value: str


class ArrayValue(_CanonicalValue):
    """Ordered sequence of values."""

    kind: Literal["array"] = "array"
    value: list[Value]


class DictionaryValue(_CanonicalValue):
    """Mapping of text keys to values."""

    kind: Literal["dictionary"] = "dictionary"
    value: dict[str, Value]


Value = Annotated[
    StringValue
    | IntegerValue
    | FloatValue
    | BooleanValue
    | DataValue
    | DateValue
    | PathValue
    | ArrayValue
    | DictionaryValue,
    Field(discriminator="kind"),
]
"""Discriminated union of all canonical value kinds.

The ``kind`` field on each variant acts as the discriminator.
"""

ArrayValue.model_rebuild()
DictionaryValue.model_rebuild()

CANONICAL_TYPES: tuple[type[_CanonicalValue], ...] = (
    StringValue,
    IntegerValue,
    FloatValue,
    BooleanValue,
    DataValue,
    DateValue,
    PathValue,
    ArrayValue,
    DictionaryValue,
)


def is_canonical(value: object) -> bool:
    """Return True if ``value`` is one of the canonical value variants."""
    return isinstance(value, _CanonicalValue)


def to_canonical(native: Any) -> Value:
    """Convert a native Python value into its canonical representation.

    Conversion rules, checked in order:

    1. canonical values pass through unchanged
    2. ``str`` and ``os.PathLike`` -> string
    3. ``bool`` -> boolean (before integers, since bool subclasses int)
    4. integral numbers -> integer (signed 64-bit range only)
    5. other real numbers -> float
    6. ``bytes``/``bytearray``/``memoryview`` -> data
    7. ``datetime`` -> date
    8. mappings with text keys -> dictionary (recursive)
    9. lists and tuples -> array (recursive)

    Args:
        native: Value supplied by the application.

    Returns:
        The canonical value.

    Raises:
        UnsupportedValueTypeError: If ``native`` or any nested element falls
            outside the supported kinds. Containers convert atomically.
    """
    return _convert(native, "")


def _convert(native: Any, path: str) -> Value:
    if isinstance(native, _CanonicalValue):
        return native  # type: ignore[return-value]
    if isinstance(native, str):
        return StringValue(value=native)
    if isinstance(native, os.PathLike):
        return StringValue(value=str(os.fspath(native)))
    if isinstance(native, bool):
        return BooleanValue(value=native)
    if isinstance(native, numbers.Integral):
        as_int = int(native)
        if not INT64_MIN <= as_int <= INT64_MAX:
            raise UnsupportedValueTypeError(native, path=path, reason="integer out of 64-bit range")
        return IntegerValue(value=as_int)
    if isinstance(native, numbers.Real):
        return FloatValue(value=float(native))
    if isinstance(native, (bytes, bytearray, memoryview)):
        return DataValue(value=bytes(native))
    if isinstance(native, datetime):
        return DateValue(value=native)
    if isinstance(native, Mapping):
        items: dict[str, Value] = {}
        for key, inner in native.items():
            if not isinstance(key, str):
                raise UnsupportedValueTypeError(key, path=f"{path}<key>")
            items[key] = _convert(inner, f"{path}.{key}" if path else key)
        return DictionaryValue(value=items)
    if isinstance(native, (list, tuple)):
        return ArrayValue(value=[_convert(inner, f"{path}[{i}]") for i, inner in enumerate(native)])
    raise UnsupportedValueTypeError(native, path=path)


def convert_mapping(mapping: Mapping[str, Any]) -> dict[str, Value]:
    """Convert every value of a mapping, failing atomically.

    Args:
        mapping: Key to native value mapping.

    Returns:
        Key to canonical value mapping.

    Raises:
        UnsupportedValueTypeError: If any value cannot be converted; no
            partial result is produced.
    """
    converted: dict[str, Value] = {}
    for key, native in mapping.items():
        if not isinstance(key, str):
            raise UnsupportedValueTypeError(key, path="<key>")
        converted[key] = _convert(native, key)
    return converted


def from_canonical(value: Any) -> Any:
    """Convert a canonical value back into its native Python form.

    Objects that are not canonical values are returned unchanged, so raw
    data handed back by a storage backend stays visible to callers that
    accept ``Any``.

    Args:
        value: Canonical value (or raw passthrough object).

    Returns:
        Native Python value.
    """
    if isinstance(value, ArrayValue):
        return [from_canonical(inner) for inner in value.value]
    if isinstance(value, DictionaryValue):
        return {key: from_canonical(inner) for key, inner in value.value.items()}
    if isinstance(value, PathValue):
        return Path(value.value)
    if isinstance(value, _CanonicalValue):
        return value.value  # type: ignore[attr-defined]
    return value


class FileReferenceArchive(BaseModel):
    """Serialized form of an archived file reference.

    Written as a data value when the file-reference archiving capability
    is enabled for a store.
    """

    model_config = ConfigDict(frozen=True)

    archive: Literal["placita.file-reference"] = "placita.file-reference"
    version: int = 1
    path: str


def archive_file_reference(path: str | os.PathLike[str]) -> bytes:
    """Archive a file-system path into bytes.

    Args:
        path: Path to archive.

    Returns:
        UTF-8 JSON archive bytes.
    """
    return FileReferenceArchive(path=os.fspath(path)).model_dump_json().encode("utf-8")


def unarchive_file_reference(data: bytes) -> Path | None:
    """Restore a path archived by :func:`archive_file_reference`.

    Args:
        data: Candidate archive bytes.

    Returns:
        The archived path, or None if ``data`` is not a valid archive.
    """
    try:
        archive = FileReferenceArchive.model_validate_json(data)
    except PydanticValidationError:
        return None
    return Path(archive.path)
