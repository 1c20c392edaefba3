"""Port interface for durable preference storage.

This module defines the PreferencesBackendPort protocol for the storage
layer behind persistent domains. The preference core only needs a narrow
contract: per-identity get/set, bulk copy, flush, and suite search-path
management. Implementations (adapters) live in infrastructure packages.

Backends exchange *primitives*, not canonical values: ``str``, ``int``,
``float``, ``bool``, ``bytes``, ``datetime``, ``pathlib.PurePath``, ``list``
and ``dict`` with ``str`` keys. A backend may hand back other objects; the
persistent domain adapter passes those through unconverted.

Example:
    >>> from placita.foundation.domain.ports import PreferencesBackendPort
    >>> def read_theme(backend: PreferencesBackendPort) -> object:
    ...     return backend.get_app_value("Theme", "com.example.editor")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@runtime_checkable
class PreferencesBackendPort(Protocol):
    """Port for durable, cross-process preference storage.

    Every call addresses one application identity: the application's own
    identifier or a suite name. Lookups through ``get_app_value`` cascade
    along the identity's search path (own domain, attached suites in attach
    order, then the global domain). Bulk copies are suite-exclusive unless
    ``search_list`` is requested.

    The protocol is runtime_checkable to enable isinstance() verification
    in tests and dependency injection validation.
    """

    def get_app_value(self, key: str, application_id: str) -> Any | None:
        """Read a value along the identity's search path.

        Args:
            key: Preference key.
            application_id: Application identifier or suite name.

        Returns:
            The stored primitive, or None when no domain on the search path
            holds the key.
        """
        ...

    def set_app_value(self, key: str, value: Any | None, application_id: str) -> None:
        """Write (or delete, when ``value`` is None) a value.

        Writes are visible to subsequent reads through the same backend
        immediately; durability is only guaranteed after synchronization.

        Args:
            key: Preference key.
            value: Primitive to store, or None to delete the key.
            application_id: Application identifier or suite name.
        """
        ...

    def copy_multiple(
        self,
        application_id: str,
        *,
        keys: Sequence[str] | None = None,
        search_list: bool = False,
    ) -> dict[str, Any]:
        """Copy many values at once.

        Args:
            application_id: Application identifier or suite name.
            keys: Restrict the copy to these keys (None copies all keys).
            search_list: When True, merge the global domain, then attached
                suites, then the identity's own domain (later wins). When
                False, only the identity's own domain is copied.

        Returns:
            Key to primitive mapping.
        """
        ...

    def synchronize_app(self, application_id: str) -> bool:
        """Flush pending writes and refresh cached state.

        Args:
            application_id: Application identifier or suite name.

        Returns:
            True on success, False if durable storage could not be updated.
        """
        ...

    def add_suite(self, application_id: str, suite_name: str) -> None:
        """Append a suite to the identity's search path.

        Args:
            application_id: Application identifier whose search path widens.
            suite_name: Suite to attach.
        """
        ...

    def remove_suite(self, application_id: str, suite_name: str) -> None:
        """Remove a suite from the identity's search path.

        Args:
            application_id: Application identifier whose search path narrows.
            suite_name: Suite to detach (no-op if not attached).
        """
        ...
