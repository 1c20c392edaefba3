"""Layered domain resolution.

Resolution chain, first match wins:
  Level 1: Argument domain (launch-argument overrides)
  Level 2: Persistent domain (backend, addressed by the store's identity)
  Level 3: Registered defaults (process-wide fallbacks)

Nested containers are never merged across levels: a dictionary found at
level 2 hides the whole registered dictionary of the same key.

The full snapshot follows a different rule: it represents what is
logically stored, so argument-domain overrides are never included.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from placita.foundation.domain.domain_names import ARGUMENT_DOMAIN
from placita.foundation.domain.values import is_canonical

if TYPE_CHECKING:
    from placita.foundation.application.persistent_domain import PersistentDomainAdapter
    from placita.foundation.application.volatile_domains import (
        RegisteredDefaults,
        VolatileDomainTable,
    )
    from placita.foundation.domain.values import Value

logger = logging.getLogger(__name__)

ResolutionSource = Literal["argument", "persistent", "registered"]


@dataclass(frozen=True)
class Resolution:
    """Result of resolving one key.

    Attributes:
        key: The resolved key.
        value: Canonical value, or a raw backend object that maps to no
            value kind.
        source: Which level of the resolution chain provided the value.
    """

    key: str
    value: Value | Any
    source: ResolutionSource


class ResolutionEngine:
    """Searches a store's domains in priority order.

    Args:
        volatile: The store's volatile domain table (holds the argument domain).
        registered: Process-wide registered defaults.
        persistent: Adapter for the store's persistent domain.
        suite: Suite name addressed in the persistent domain, or None for
            the application identity.
    """

    def __init__(
        self,
        volatile: VolatileDomainTable,
        registered: RegisteredDefaults,
        persistent: PersistentDomainAdapter,
        suite: str | None = None,
    ) -> None:
        self._volatile = volatile
        self._registered = registered
        self._persistent = persistent
        self._suite = suite

    def resolve(self, key: str) -> Resolution | None:
        """Resolve ``key`` through the three-level chain.

        Args:
            key: Preference key.

        Returns:
            Resolution with value and source, or None when no level holds
            the key.
        """
        argument_value = self._volatile.get_value(ARGUMENT_DOMAIN, key)
        if argument_value is not None:
            return Resolution(key=key, value=argument_value, source="argument")

        persistent_value = self._persistent.get(key, self._suite)
        if persistent_value is not None:
            return Resolution(key=key, value=persistent_value, source="persistent")

        registered_value = self._registered.get(key)
        if registered_value is not None:
            return Resolution(key=key, value=registered_value, source="registered")

        return None

    def snapshot(self, *, search_outside_suite: bool) -> dict[str, Value]:
        """Build a full key -> value snapshot of what is logically stored.

        Registered defaults come first (only when searching outside the
        suite), then every persistent value overlays them. Persistent
        entries that map to no value kind are skipped individually.

        Args:
            search_outside_suite: Include registered defaults and the
                backend search path (global domain, attached suites).

        Returns:
            Key to canonical value mapping.
        """
        merged: dict[str, Value] = self._registered.snapshot() if search_outside_suite else {}
        persisted = self._persistent.enumerate(self._suite, search_list=search_outside_suite)
        for key, value in persisted.items():
            if not is_canonical(value):
                logger.debug(
                    "snapshot_entry_skipped",
                    extra={"key": key, "value_type": type(value).__name__},
                )
                continue
            merged[key] = value
        return merged
