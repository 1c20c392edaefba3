"""Placita Foundation Application -- the preference store."""

from placita.foundation.application.arguments import get_parsed_arguments, parse_arguments
from placita.foundation.application.notifications import (
    NotificationCenter,
    get_notification_center,
)
from placita.foundation.application.persistent_domain import (
    PersistentDomainAdapter,
    to_primitive,
    to_value,
)
from placita.foundation.application.preferences import Preferences, PreferencesEnvironment
from placita.foundation.application.resolution import (
    Resolution,
    ResolutionEngine,
    ResolutionSource,
)
from placita.foundation.application.volatile_domains import (
    RegisteredDefaults,
    VolatileDomainTable,
    get_registered_defaults,
)

__all__ = [
    "NotificationCenter",
    "PersistentDomainAdapter",
    "Preferences",
    "PreferencesEnvironment",
    "RegisteredDefaults",
    "Resolution",
    "ResolutionEngine",
    "ResolutionSource",
    "VolatileDomainTable",
    "get_notification_center",
    "get_parsed_arguments",
    "get_registered_defaults",
    "parse_arguments",
    "to_primitive",
    "to_value",
]
