"""Placita Infra Persistence -- storage backends, settings, standard store wiring."""

from placita.infra.persistence.codec import UnknownStoredValue, decode, encode
from placita.infra.persistence.database import DatabaseManager
from placita.infra.persistence.memory_backend import InMemoryPreferencesBackend
from placita.infra.persistence.settings import PreferencesSettings, get_preferences_settings
from placita.infra.persistence.sql_backend import SqlPreferencesBackend
from placita.infra.persistence.standard import (
    create_backend,
    get_standard_backend,
    get_standard_environment,
    get_standard_preferences,
    reset_standard_preferences,
)

__all__ = [
    "DatabaseManager",
    "InMemoryPreferencesBackend",
    "PreferencesSettings",
    "SqlPreferencesBackend",
    "UnknownStoredValue",
    "create_backend",
    "decode",
    "encode",
    "get_preferences_settings",
    "get_standard_backend",
    "get_standard_environment",
    "get_standard_preferences",
    "reset_standard_preferences",
]
