"""In-memory domains: registered defaults and per-store volatile domains.

Two kinds of shared mutable state live here:

- ``RegisteredDefaults``: the process-wide fallback mapping shared by every
  store. Reach it through :func:`get_registered_defaults`; tests pass an
  isolated instance through the preferences environment instead.
- ``VolatileDomainTable``: each store's own name -> mapping table (the
  argument domain plus any application-set volatile domains).

Both guard their mappings with a lock held only for the read, merge or
write of one mapping. Conversion to canonical values happens before the
lock is taken.
"""

from __future__ import annotations

import logging
import threading
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from placita.foundation.domain.values import convert_mapping

if TYPE_CHECKING:
    from collections.abc import Mapping

    from placita.foundation.domain.values import Value

logger = logging.getLogger(__name__)


class RegisteredDefaults:
    """Process-wide registered fallback values.

    Lifetime is the process lifetime. Values are lowest priority during
    resolution and are never persisted.
    """

    def __init__(self) -> None:
        self._values: dict[str, Value] = {}
        self._lock = threading.Lock()

    def register(self, defaults: Mapping[str, Any]) -> None:
        """Merge ``defaults`` into the registered values.

        Every value is converted before anything is merged, so an
        unsupported value leaves the registration untouched.

        Args:
            defaults: Key to native value mapping. New keys overwrite old ones.

        Raises:
            UnsupportedValueTypeError: If any value cannot be converted.
        """
        converted = convert_mapping(defaults)
        with self._lock:
            self._values.update(converted)
        logger.debug("defaults_registered", extra={"keys": sorted(converted)})

    def get(self, key: str) -> Value | None:
        """Return the registered value for ``key`` or None."""
        with self._lock:
            return self._values.get(key)

    def snapshot(self) -> dict[str, Value]:
        """Return a shallow copy of every registered value."""
        with self._lock:
            return dict(self._values)

    def clear(self) -> None:
        """Drop every registered value."""
        with self._lock:
            self._values.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)


@lru_cache(maxsize=1)
def get_registered_defaults() -> RegisteredDefaults:
    """Get the process-wide registered defaults singleton.

    Clear cache with ``get_registered_defaults.cache_clear()`` for testing.

    Returns:
        Singleton RegisteredDefaults instance.
    """
    return RegisteredDefaults()


class VolatileDomainTable:
    """Per-store table of named in-memory domains.

    Domains are created implicitly on first write and destroyed on
    explicit removal. A single lock guards the table; each operation holds
    it only while reading or writing one domain's mapping.
    """

    def __init__(self) -> None:
        self._domains: dict[str, dict[str, Value]] = {}
        self._lock = threading.Lock()

    def get_domain(self, name: str) -> dict[str, Value]:
        """Return a copy of the named domain (empty if absent)."""
        with self._lock:
            domain = self._domains.get(name)
            return dict(domain) if domain is not None else {}

    def get_value(self, name: str, key: str) -> Value | None:
        """Return one value of the named domain, or None."""
        with self._lock:
            domain = self._domains.get(name)
            return domain.get(key) if domain is not None else None

    def set_domain(self, name: str, values: Mapping[str, Any]) -> None:
        """Merge ``values`` into the named domain, creating it if needed.

        Args:
            name: Domain name.
            values: Key to native value mapping. New keys overwrite old ones.

        Raises:
            UnsupportedValueTypeError: If any value cannot be converted; the
                domain is left unchanged.
        """
        converted = convert_mapping(values)
        with self._lock:
            self._domains.setdefault(name, {}).update(converted)

    def remove_domain(self, name: str) -> None:
        """Remove the named domain (no-op if absent)."""
        with self._lock:
            self._domains.pop(name, None)

    def domain_names(self) -> list[str]:
        """Return the names of every domain in the table."""
        with self._lock:
            return list(self._domains)
