"""Tagged JSON codec for stored preference primitives.

JSON covers text, numbers, booleans and arrays directly. The remaining
primitives are written as tagged objects::

    {"$type": "data", "base64": "aGk="}
    {"$type": "date", "iso": "2024-05-01T12:00:00+00:00"}
    {"$type": "path", "path": "/home/me/notes.txt"}
    {"$type": "dictionary", "items": {...}}

A tag this codec does not know (written by a newer release, say) decodes
into :class:`UnknownStoredValue`, which the store passes through
unconverted.
"""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePath
from typing import Any

from placita.foundation.domain.exceptions import StorageBackendError

TYPE_TAG = "$type"


@dataclass(frozen=True)
class UnknownStoredValue:
    """A stored entry whose tag this codec does not understand.

    Attributes:
        tag: The unrecognized ``$type`` tag.
        payload: The full decoded JSON object.
    """

    tag: str
    payload: dict[str, Any]


def encode(primitive: Any) -> str:
    """Encode a backend primitive as JSON text.

    Raises:
        StorageBackendError: If ``primitive`` holds an unencodable object.
    """
    return json.dumps(_to_json(primitive), separators=(",", ":"))


def decode(text: str) -> Any:
    """Decode JSON text written by :func:`encode`.

    Raises:
        StorageBackendError: If ``text`` is not valid JSON.
    """
    try:
        raw = json.loads(text)
    except ValueError as exc:
        raise StorageBackendError("decode", f"stored value is not valid JSON: {exc}") from exc
    return _from_json(raw)


def _to_json(primitive: Any) -> Any:
    if isinstance(primitive, (str, bool, int, float)):
        return primitive
    if isinstance(primitive, (bytes, bytearray)):
        return {TYPE_TAG: "data", "base64": base64.b64encode(primitive).decode("ascii")}
    if isinstance(primitive, datetime):
        return {TYPE_TAG: "date", "iso": primitive.isoformat()}
    if isinstance(primitive, PurePath):
        return {TYPE_TAG: "path", "path": str(primitive)}
    if isinstance(primitive, (list, tuple)):
        return [_to_json(inner) for inner in primitive]
    if isinstance(primitive, dict):
        return {
            TYPE_TAG: "dictionary",
            "items": {str(key): _to_json(inner) for key, inner in primitive.items()},
        }
    if isinstance(primitive, UnknownStoredValue):
        return primitive.payload
    raise StorageBackendError(
        "encode",
        f"cannot encode value of type {type(primitive).__name__}",
        value_type=type(primitive).__name__,
    )


def _from_json(raw: Any) -> Any:
    if isinstance(raw, list):
        return [_from_json(inner) for inner in raw]
    if not isinstance(raw, dict):
        return raw
    tag = raw.get(TYPE_TAG)
    try:
        if tag == "dictionary":
            return {key: _from_json(inner) for key, inner in raw["items"].items()}
        if tag == "data":
            return base64.b64decode(raw["base64"], validate=True)
        if tag == "date":
            return datetime.fromisoformat(raw["iso"])
        if tag == "path":
            return PurePath(raw["path"])
    except (KeyError, TypeError, ValueError, AttributeError):
        return UnknownStoredValue(tag=str(tag), payload=raw)
    return UnknownStoredValue(tag=str(tag), payload=raw)
