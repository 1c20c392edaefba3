"""Typed preference store facade.

``Preferences`` is the public surface of the preference store: typed
accessors and mutators built on the resolution chain, plus lifecycle
operations for volatile, registered and persistent domains.

Accessors never raise. A key that no domain holds, or a stored value whose
kind does not fit the accessor, yields the accessor's zero value (``0``,
``0.0``, ``False`` or ``None``). Numeric and boolean accessors parse stored
text leniently.

Mutators are strict: a value outside the supported kinds raises
:class:`UnsupportedValueTypeError` and nothing is written.

Usage::

    environment = PreferencesEnvironment(backend=backend, application_id="com.example.editor")
    prefs = Preferences(environment=environment)
    prefs.register_defaults({"FontSize": 12})
    prefs.get_int("FontSize")       # 12
    prefs.set("FontSize", 14)
    prefs.get_int("FontSize")       # 14
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from placita.foundation.application.arguments import get_parsed_arguments
from placita.foundation.application.notifications import get_notification_center
from placita.foundation.application.persistent_domain import PersistentDomainAdapter
from placita.foundation.application.resolution import ResolutionEngine
from placita.foundation.application.volatile_domains import (
    VolatileDomainTable,
    get_registered_defaults,
)
from placita.foundation.domain.coercion import parse_bool, parse_float, parse_int
from placita.foundation.domain.domain_names import (
    ARGUMENT_DOMAIN,
    DID_CHANGE_NOTIFICATION,
    REGISTRATION_DOMAIN,
    SuiteName,
)
from placita.foundation.domain.exceptions import (
    InvalidSuiteNameError,
    StorageBackendError,
    UnsupportedValueTypeError,
    ValidationError,
)
from placita.foundation.domain.values import (
    INT64_MAX,
    INT64_MIN,
    ArrayValue,
    BooleanValue,
    DataValue,
    DictionaryValue,
    FloatValue,
    IntegerValue,
    PathValue,
    StringValue,
    archive_file_reference,
    convert_mapping,
    from_canonical,
    to_canonical,
    unarchive_file_reference,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from placita.foundation.application.volatile_domains import RegisteredDefaults
    from placita.foundation.domain.ports import NotificationSinkPort, PreferencesBackendPort
    from placita.foundation.domain.values import Value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreferencesEnvironment:
    """Shared context for every store of one process.

    Holding the collaborators explicitly (rather than looking them up
    globally) lets tests build isolated environments.

    Attributes:
        backend: Durable storage backend.
        application_id: Identity of the running application.
        registered_defaults: Process-wide registered fallback values.
        notifications: Sink for change notifications.
        arguments: Raw argument-domain mapping.
        archive_file_references: Capability flag for ``set_url``.
    """

    backend: PreferencesBackendPort
    application_id: str
    registered_defaults: RegisteredDefaults = field(default_factory=get_registered_defaults)
    notifications: NotificationSinkPort = field(default_factory=get_notification_center)
    arguments: Mapping[str, Any] = field(default_factory=get_parsed_arguments)
    archive_file_references: bool = False


class Preferences:
    """Typed, layered preference store for one application or suite identity.

    Args:
        suite_name: Suite whose persistent domain this store addresses, or
            None for the application's own identity.
        environment: Shared process context.

    Raises:
        InvalidSuiteNameError: If ``suite_name`` is not a valid suite name.
    """

    def __init__(
        self,
        suite_name: str | None = None,
        *,
        environment: PreferencesEnvironment,
    ) -> None:
        self._suite = SuiteName(suite_name).value if suite_name is not None else None
        self._environment = environment
        self._registered = environment.registered_defaults
        self._notifications = environment.notifications
        self._volatile = VolatileDomainTable()
        self._persistent = PersistentDomainAdapter(
            environment.backend,
            environment.application_id,
            archive_file_references=environment.archive_file_references,
        )
        self._engine = ResolutionEngine(
            self._volatile,
            self._registered,
            self._persistent,
            self._suite,
        )
        self._seed_argument_domain(environment.arguments)

    @classmethod
    def open_suite(
        cls,
        suite_name: str,
        *,
        environment: PreferencesEnvironment,
    ) -> Preferences | None:
        """Open a store for ``suite_name``, or return None if the name is invalid."""
        try:
            return cls(suite_name, environment=environment)
        except InvalidSuiteNameError as exc:
            logger.debug("suite_open_rejected", extra={"suite": suite_name, "reason": exc.reason})
            return None

    def _seed_argument_domain(self, arguments: Mapping[str, Any]) -> None:
        try:
            self._volatile.set_domain(ARGUMENT_DOMAIN, arguments)
        except UnsupportedValueTypeError as exc:
            logger.warning("argument_domain_discarded", extra={"error": str(exc)})
            self._volatile.set_domain(ARGUMENT_DOMAIN, {})

    @property
    def suite_name(self) -> str | None:
        """Suite addressed by this store (None for the application identity)."""
        return self._suite

    @property
    def application_id(self) -> str:
        """Identity of the running application."""
        return self._persistent.application_id

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(suite_name={self._suite!r}, application_id={self.application_id!r})"

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def _resolve_value(self, key: str) -> Value | Any | None:
        resolution = self._engine.resolve(key)
        return resolution.value if resolution is not None else None

    def get_object(self, key: str) -> Any | None:
        """Return the resolved native value for ``key``, or None.

        Raw backend objects that map to no value kind are returned as-is.
        """
        value = self._resolve_value(key)
        if value is None:
            return None
        return from_canonical(value)

    def get_string(self, key: str) -> str | None:
        """Return a text value, or None."""
        value = self._resolve_value(key)
        if isinstance(value, StringValue):
            return value.value
        return None

    def get_array(self, key: str) -> list[Any] | None:
        """Return an array value as a list of native values, or None."""
        value = self._resolve_value(key)
        if isinstance(value, ArrayValue):
            return from_canonical(value)
        return None

    def get_dictionary(self, key: str) -> dict[str, Any] | None:
        """Return a dictionary value as a native dict, or None."""
        value = self._resolve_value(key)
        if isinstance(value, DictionaryValue):
            return from_canonical(value)
        return None

    def get_data(self, key: str) -> bytes | None:
        """Return a data value, or None."""
        value = self._resolve_value(key)
        if isinstance(value, DataValue):
            return value.value
        return None

    def get_string_array(self, key: str) -> list[str] | None:
        """Return an array whose elements are all text, or None."""
        value = self._resolve_value(key)
        if isinstance(value, ArrayValue) and all(
            isinstance(inner, StringValue) for inner in value.value
        ):
            return [inner.value for inner in value.value]  # type: ignore[union-attr]
        return None

    def get_int(self, key: str) -> int:
        """Return an integer view of the stored value (0 when absent).

        Resolution of the stored kind:
        - integer: itself
        - float: truncated toward zero and clamped to the signed 64-bit
          range (0 for NaN and infinities)
        - boolean: 1 or 0
        - string: leading integer, leniently parsed
        - anything else: 0
        """
        value = self._resolve_value(key)
        if isinstance(value, IntegerValue):
            return value.value
        if isinstance(value, FloatValue):
            if not math.isfinite(value.value):
                return 0
            return max(INT64_MIN, min(INT64_MAX, int(value.value)))
        if isinstance(value, BooleanValue):
            return int(value.value)
        if isinstance(value, StringValue):
            return parse_int(value.value)
        return 0

    def get_float(self, key: str) -> float:
        """Return a float view of the stored value (0.0 when absent)."""
        value = self._resolve_value(key)
        if isinstance(value, (IntegerValue, FloatValue, BooleanValue)):
            return float(value.value)
        if isinstance(value, StringValue):
            return parse_float(value.value)
        return 0.0

    def get_bool(self, key: str) -> bool:
        """Return a boolean view of the stored value (False when absent).

        Numbers are true when non-zero; text is true when it starts with
        ``Y``, ``T`` or a non-zero digit.
        """
        value = self._resolve_value(key)
        if isinstance(value, BooleanValue):
            return value.value
        if isinstance(value, (IntegerValue, FloatValue)):
            return value.value != 0
        if isinstance(value, StringValue):
            return parse_bool(value.value)
        return False

    def get_url(self, key: str) -> Path | None:
        """Return a file-system path, or None.

        Resolution of the stored kind:
        - path: itself
        - string: the text with a leading ``~`` expanded
        - data: a previously archived file reference (None if not one)
        - anything else: None
        """
        value = self._resolve_value(key)
        if isinstance(value, PathValue):
            return Path(value.value)
        if isinstance(value, StringValue):
            return Path(os.path.expanduser(value.value))
        if isinstance(value, DataValue):
            return unarchive_file_reference(value.value)
        return None

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set(self, key: str, value: Any | None) -> None:
        """Store ``value`` in the persistent domain.

        Args:
            key: Preference key.
            value: Native value. None removes the key; path-like values are
                stored through :meth:`set_url`.

        Raises:
            UnsupportedValueTypeError: If ``value`` is outside the supported
                kinds. Nothing is written.
        """
        if value is None:
            self.remove(key)
            return
        if isinstance(value, os.PathLike):
            self.set_url(key, value)
            return
        try:
            canonical = to_canonical(value)
        except UnsupportedValueTypeError as exc:
            exc.context.setdefault("key", key)
            raise
        self._persistent.set(key, canonical, self._suite)

    def set_int(self, key: str, value: int) -> None:
        """Store an integer."""
        self.set(key, int(value))

    def set_float(self, key: str, value: float) -> None:
        """Store a float."""
        self.set(key, float(value))

    def set_bool(self, key: str, value: bool) -> None:
        """Store a boolean."""
        self.set(key, bool(value))

    def set_url(self, key: str, url: str | os.PathLike[str] | None) -> None:
        """Store a file-system path.

        With the file-reference archiving capability the path is archived
        as data; otherwise its string form is stored.
        """
        if url is None:
            self.remove(key)
            return
        if self._persistent.archives_file_references:
            canonical = to_canonical(archive_file_reference(url))
        else:
            canonical = to_canonical(os.fspath(url))
        self._persistent.set(key, canonical, self._suite)

    def remove(self, key: str) -> None:
        """Remove ``key`` from the persistent domain.

        Registered defaults and argument values for the key stay in place,
        so reads fall back to them.
        """
        self._persistent.remove(key, self._suite)

    def register_defaults(self, defaults: Mapping[str, Any]) -> None:
        """Merge fallback values into the process-wide registration domain.

        Raises:
            UnsupportedValueTypeError: If any value is unsupported; nothing
                is registered.
        """
        self._registered.register(defaults)

    # ------------------------------------------------------------------
    # Volatile domains
    # ------------------------------------------------------------------

    @property
    def volatile_domain_names(self) -> list[str]:
        """Names of every volatile domain, including the reserved ones."""
        names = self._volatile.domain_names()
        if REGISTRATION_DOMAIN not in names:
            names.append(REGISTRATION_DOMAIN)
        return names

    def volatile_domain(self, name: str) -> dict[str, Any]:
        """Return a volatile domain as native values (empty if absent)."""
        if name == REGISTRATION_DOMAIN:
            values = self._registered.snapshot()
        else:
            values = self._volatile.get_domain(name)
        return {key: from_canonical(value) for key, value in values.items()}

    def set_volatile_domain(self, name: str, values: Mapping[str, Any]) -> None:
        """Merge ``values`` into a volatile domain.

        The registration domain name delegates to :meth:`register_defaults`.

        Raises:
            ValidationError: If ``name`` is the read-only argument domain.
            UnsupportedValueTypeError: If any value is unsupported; the
                domain is left unchanged.
        """
        if name == ARGUMENT_DOMAIN:
            raise ValidationError("domain_name", "the argument domain is read-only")
        if name == REGISTRATION_DOMAIN:
            self.register_defaults(values)
            return
        self._volatile.set_domain(name, values)

    def remove_volatile_domain(self, name: str) -> None:
        """Remove a volatile domain.

        Raises:
            ValidationError: If ``name`` is the argument or registration domain.
        """
        if name in (ARGUMENT_DOMAIN, REGISTRATION_DOMAIN):
            raise ValidationError("domain_name", f"{name} cannot be removed")
        self._volatile.remove_domain(name)

    # ------------------------------------------------------------------
    # Suites and persistent domains
    # ------------------------------------------------------------------

    def add_suite(self, suite_name: str) -> None:
        """Widen the application's backend search path with a suite.

        Raises:
            InvalidSuiteNameError: If ``suite_name`` is not a valid suite name.
        """
        self._persistent.add_suite(SuiteName(suite_name).value)

    def remove_suite(self, suite_name: str) -> None:
        """Narrow the application's backend search path."""
        self._persistent.remove_suite(suite_name)

    def dictionary_representation(self) -> dict[str, Any]:
        """Return every logically stored value.

        Registered defaults overlaid by persisted values (including the
        backend search path). Argument-domain overrides are not included.
        """
        snapshot = self._engine.snapshot(search_outside_suite=True)
        return {key: from_canonical(value) for key, value in snapshot.items()}

    def persistent_domain(self, name: str) -> dict[str, Any] | None:
        """Export the persistent domain ``name``.

        Returns:
            The domain's own values (no registered defaults, no search
            path), or None if ``name`` is not a valid suite name.
        """
        store = Preferences.open_suite(name, environment=self._environment)
        if store is None:
            return None
        snapshot = store._engine.snapshot(search_outside_suite=False)
        return {key: from_canonical(value) for key, value in snapshot.items()}

    def set_persistent_domain(self, name: str, values: Mapping[str, Any]) -> None:
        """Replace the persistent domain ``name`` with ``values``.

        Every existing key of the domain is removed before the new values
        are written (full replace, no merge). The change notification is
        posted afterwards, also when ``name`` is invalid and nothing was
        written.

        Raises:
            UnsupportedValueTypeError: If any value is unsupported; the
                domain is left unchanged.
            StorageBackendError: If the existing keys cannot be read; nothing
                is written and no notification is posted.
        """
        converted = convert_mapping(values)
        store = Preferences.open_suite(name, environment=self._environment)
        if store is not None:
            store._replace_persistent(converted)
            logger.info("persistent_domain_replaced", extra={"suite": name, "keys": len(converted)})
        else:
            logger.warning("persistent_domain_name_invalid", extra={"suite": name})
        self._notifications.post(DID_CHANGE_NOTIFICATION, self)

    def remove_persistent_domain(self, name: str) -> None:
        """Remove every key of the persistent domain ``name``.

        Posts the change notification only when a store could be opened
        for ``name``.

        Raises:
            StorageBackendError: If the existing keys cannot be read; nothing
                is removed and no notification is posted.
        """
        store = Preferences.open_suite(name, environment=self._environment)
        if store is None:
            return
        store._replace_persistent({})
        logger.info("persistent_domain_removed", extra={"suite": name})
        self._notifications.post(DID_CHANGE_NOTIFICATION, self)

    def _replace_persistent(self, values: Mapping[str, Value]) -> None:
        # Existing keys must be known before anything is written.
        try:
            existing = self._persistent.enumerate(self._suite, strict=True)
        except StorageBackendError as exc:
            logger.warning(
                "persistent_domain_replace_aborted",
                extra={"suite": self._suite, "error": str(exc)},
            )
            raise
        for key in existing:
            self._persistent.remove(key, self._suite)
        for key, value in values.items():
            self._persistent.set(key, value, self._suite)

    def synchronize(self) -> bool:
        """Flush pending persistent writes.

        Returns:
            True on success, False when durable storage is unavailable.
        """
        return self._persistent.synchronize(self._suite)

    def is_forced(self, key: str, domain: str | None = None) -> bool:
        """Report whether ``key`` is locked by an administrator.

        No mechanism can force a key in this store, so this is always False.
        """
        return False
