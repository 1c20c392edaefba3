"""Adapter between canonical values and the durable storage backend.

The adapter owns one application identity. Every call translates canonical
values into the backend's primitive set and back:

    canonical Value  --to_primitive-->  str/int/float/bool/bytes/datetime/
                                        PurePath/list/dict
    backend primitive --to_value-->     canonical Value (or raw passthrough)

A backend may return something outside the primitive set (a newer value
kind written by another process, a corrupt entry). Such data is returned
unconverted so that callers accepting ``Any`` still see it, while typed
accessors treat it as a mismatch.

Backend failures never escape: reads degrade to absent values and
``synchronize`` returns False. No in-process lock is held across a backend
call.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path, PurePath
from typing import TYPE_CHECKING, Any

from placita.foundation.domain.exceptions import StorageBackendError
from placita.foundation.domain.values import (
    INT64_MAX,
    INT64_MIN,
    ArrayValue,
    BooleanValue,
    DataValue,
    DateValue,
    DictionaryValue,
    FloatValue,
    IntegerValue,
    PathValue,
    StringValue,
)

if TYPE_CHECKING:
    from placita.foundation.domain.ports.storage_backend import PreferencesBackendPort
    from placita.foundation.domain.values import Value

logger = logging.getLogger(__name__)


class _Unconvertible(Exception):
    """Internal signal: a backend primitive maps to no value kind."""


def to_primitive(value: Value) -> Any:
    """Translate a canonical value into a backend primitive.

    Args:
        value: Canonical value.

    Returns:
        Primitive accepted by every backend.
    """
    if isinstance(value, ArrayValue):
        return [to_primitive(inner) for inner in value.value]
    if isinstance(value, DictionaryValue):
        return {key: to_primitive(inner) for key, inner in value.value.items()}
    if isinstance(value, PathValue):
        return Path(value.value)
    return value.value


def to_value(primitive: Any) -> Value | Any:
    """Translate a backend primitive into a canonical value.

    Args:
        primitive: Object returned by the backend.

    Returns:
        The canonical value, or ``primitive`` itself when it (or any
        element it contains) maps to no value kind.
    """
    try:
        return _to_value(primitive)
    except _Unconvertible:
        logger.debug(
            "backend_value_passed_through",
            extra={"primitive_type": type(primitive).__name__},
        )
        return primitive


def _to_value(primitive: Any) -> Value:
    if isinstance(primitive, str):
        return StringValue(value=primitive)
    if isinstance(primitive, bool):
        return BooleanValue(value=primitive)
    if isinstance(primitive, int):
        if not INT64_MIN <= primitive <= INT64_MAX:
            raise _Unconvertible
        return IntegerValue(value=primitive)
    if isinstance(primitive, float):
        return FloatValue(value=primitive)
    if isinstance(primitive, (bytes, bytearray)):
        return DataValue(value=bytes(primitive))
    if isinstance(primitive, datetime):
        return DateValue(value=primitive)
    if isinstance(primitive, PurePath):
        return PathValue(value=str(primitive))
    if isinstance(primitive, (list, tuple)):
        return ArrayValue(value=[_to_value(inner) for inner in primitive])
    if isinstance(primitive, dict):
        items: dict[str, Value] = {}
        for key, inner in primitive.items():
            if not isinstance(key, str):
                raise _Unconvertible
            items[key] = _to_value(inner)
        return DictionaryValue(value=items)
    raise _Unconvertible


class PersistentDomainAdapter:
    """Typed access to the persistent domains of one application identity.

    Args:
        backend: Storage backend implementing PreferencesBackendPort.
        application_id: Identity addressed when ``suite`` is None.
        archive_file_references: Whether path values written through
            ``set_url`` are archived as data. Resolved once at construction.
    """

    def __init__(
        self,
        backend: PreferencesBackendPort,
        application_id: str,
        *,
        archive_file_references: bool = False,
    ) -> None:
        self._backend = backend
        self._application_id = application_id
        self._archive_file_references = archive_file_references

    @property
    def application_id(self) -> str:
        """Identity addressed when no suite is given."""
        return self._application_id

    @property
    def archives_file_references(self) -> bool:
        """Whether file references are archived as data values."""
        return self._archive_file_references

    def _identity(self, suite: str | None) -> str:
        return suite if suite is not None else self._application_id

    def get(self, key: str, suite: str | None = None) -> Value | Any | None:
        """Read one value along the identity's search path.

        Args:
            key: Preference key.
            suite: Suite name, or None for the application identity.

        Returns:
            Canonical value, raw backend object, or None when absent or
            when the backend is unavailable.
        """
        identity = self._identity(suite)
        try:
            primitive = self._backend.get_app_value(key, identity)
        except StorageBackendError as exc:
            logger.warning(
                "persistent_read_failed",
                extra={"key": key, "identity": identity, "error": str(exc)},
            )
            return None
        if primitive is None:
            return None
        return to_value(primitive)

    def set(self, key: str, value: Value | None, suite: str | None = None) -> None:
        """Write one value, or delete it when ``value`` is None.

        Args:
            key: Preference key.
            value: Canonical value, or None to delete.
            suite: Suite name, or None for the application identity.

        Raises:
            StorageBackendError: If the backend rejects the write.
        """
        identity = self._identity(suite)
        primitive = to_primitive(value) if value is not None else None
        self._backend.set_app_value(key, primitive, identity)

    def remove(self, key: str, suite: str | None = None) -> None:
        """Delete one value from the identity's own domain."""
        self.set(key, None, suite)

    def enumerate(
        self,
        suite: str | None = None,
        *,
        search_list: bool = False,
        strict: bool = False,
    ) -> dict[str, Value | Any]:
        """Copy every value of the identity.

        Args:
            suite: Suite name, or None for the application identity.
            search_list: Merge the global domain and attached suites beneath
                the identity's own values. Internal per-domain operations
                (import, export, clear) keep this False.
            strict: Propagate backend failures instead of returning an
                empty mapping. Used where an empty result would be taken
                as "nothing stored".

        Returns:
            Key to canonical value (or raw passthrough) mapping; empty when
            the backend is unavailable.

        Raises:
            StorageBackendError: If ``strict`` and the backend is unavailable.
        """
        identity = self._identity(suite)
        try:
            primitives = self._backend.copy_multiple(identity, search_list=search_list)
        except StorageBackendError as exc:
            if strict:
                raise
            logger.warning(
                "persistent_enumerate_failed",
                extra={"identity": identity, "error": str(exc)},
            )
            return {}
        return {key: to_value(primitive) for key, primitive in primitives.items()}

    def synchronize(self, suite: str | None = None) -> bool:
        """Flush pending writes to durable storage.

        Returns:
            True on success, False on any backend failure.
        """
        identity = self._identity(suite)
        try:
            synchronized = bool(self._backend.synchronize_app(identity))
        except StorageBackendError as exc:
            logger.warning(
                "persistent_synchronize_failed",
                extra={"identity": identity, "error": str(exc)},
            )
            return False
        if not synchronized:
            logger.warning("persistent_synchronize_incomplete", extra={"identity": identity})
        return synchronized

    def add_suite(self, suite_name: str) -> None:
        """Attach a suite to the application identity's search path."""
        self._backend.add_suite(self._application_id, suite_name)

    def remove_suite(self, suite_name: str) -> None:
        """Detach a suite from the application identity's search path."""
        self._backend.remove_suite(self._application_id, suite_name)
