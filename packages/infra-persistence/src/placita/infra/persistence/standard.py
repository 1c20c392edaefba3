"""Process-wide standard preference store.

Wires settings, the storage backend and the foundation singletons into a
ready-to-use :class:`Preferences` for the running application::

    from placita.infra.persistence import get_standard_preferences

    prefs = get_standard_preferences()
    prefs.register_defaults({"Theme": "light"})
    prefs.set("Theme", "dark")
    prefs.synchronize()
"""

from __future__ import annotations

from functools import lru_cache

from placita.foundation.application.preferences import Preferences, PreferencesEnvironment
from placita.infra.observability.logging import configure_logging, get_logger
from placita.infra.persistence.database import DatabaseManager
from placita.infra.persistence.memory_backend import InMemoryPreferencesBackend
from placita.infra.persistence.settings import PreferencesSettings, get_preferences_settings
from placita.infra.persistence.sql_backend import SqlPreferencesBackend

logger = get_logger(__name__)


def create_backend(settings: PreferencesSettings) -> InMemoryPreferencesBackend:
    """Create the storage backend selected by ``settings``.

    Args:
        settings: Preference settings.

    Returns:
        In-memory backend for ``backend="memory"``, SQL backend otherwise.
    """
    if settings.backend == "memory":
        return InMemoryPreferencesBackend()
    return SqlPreferencesBackend(DatabaseManager.from_settings(settings))


@lru_cache(maxsize=1)
def get_standard_backend() -> InMemoryPreferencesBackend:
    """Get the process-wide storage backend singleton."""
    return create_backend(get_preferences_settings())


@lru_cache(maxsize=1)
def get_standard_environment() -> PreferencesEnvironment:
    """Get the process-wide preferences environment singleton.

    Configures structlog first when ``PLACITA_CONFIGURE_LOGGING`` is set.
    """
    settings = get_preferences_settings()
    if settings.configure_logging:
        configure_logging()
    logger.debug(
        "standard_environment_created",
        application_id=settings.application_id,
        backend=settings.backend,
    )
    return PreferencesEnvironment(
        backend=get_standard_backend(),
        application_id=settings.application_id,
        archive_file_references=settings.archive_file_references,
    )


@lru_cache(maxsize=1)
def get_standard_preferences() -> Preferences:
    """Get the store for the running application's own identity."""
    return Preferences(environment=get_standard_environment())


def reset_standard_preferences() -> None:
    """Flush and drop the cached standard store.

    The next call to :func:`get_standard_preferences` builds a fresh store
    from the current settings. Registered defaults are process-wide and
    survive the reset.
    """
    if get_standard_backend.cache_info().currsize:
        get_standard_backend().close()
    get_standard_preferences.cache_clear()
    get_standard_environment.cache_clear()
    get_standard_backend.cache_clear()
