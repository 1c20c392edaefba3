"""SQL preferences backend with a write-back cache.

Values live in one table, one row per (domain, key), encoded with the
tagged JSON codec::

    placita_preferences(pref_domain, pref_key, pref_value, updated_at)

Reads are served from an in-memory cache that is filled lazily, one domain
at a time. Writes land in the cache immediately (read-your-writes) and are
recorded as pending. ``synchronize_app`` flushes every pending write in one
transaction, then reloads the requested domain so that changes made by
other processes become visible. Pending local writes always win over
reloaded rows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from placita.foundation.domain.exceptions import StorageBackendError
from placita.infra.observability.logging import get_logger
from placita.infra.persistence.codec import decode, encode
from placita.infra.persistence.memory_backend import InMemoryPreferencesBackend

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.engine import Row
    from sqlalchemy.orm import Session

    from placita.infra.persistence.database import DatabaseManager

logger = get_logger(__name__)

TABLE_NAME = "placita_preferences"

_CREATE_TABLE = text(
    f"CREATE TABLE IF NOT EXISTS {TABLE_NAME} ("
    "pref_domain VARCHAR(255) NOT NULL, "
    "pref_key VARCHAR(1024) NOT NULL, "
    "pref_value TEXT NOT NULL, "
    "updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP, "
    "PRIMARY KEY (pref_domain, pref_key))"
)
_SELECT_DOMAIN = text(
    f"SELECT pref_key, pref_value FROM {TABLE_NAME} WHERE pref_domain = :domain"
)
_UPSERT = text(
    f"INSERT INTO {TABLE_NAME} (pref_domain, pref_key, pref_value, updated_at) "
    "VALUES (:domain, :key, :value, CURRENT_TIMESTAMP) "
    "ON CONFLICT (pref_domain, pref_key) DO UPDATE SET "
    "pref_value = excluded.pref_value, "
    "updated_at = CURRENT_TIMESTAMP"
)
_DELETE = text(f"DELETE FROM {TABLE_NAME} WHERE pref_domain = :domain AND pref_key = :key")


class SqlPreferencesBackend(InMemoryPreferencesBackend):
    """Durable preference storage over SQLAlchemy.

    Database failures (including an unusable SQLite location) surface as
    :class:`StorageBackendError` on reads of a not-yet-loaded domain and as
    ``False`` from ``synchronize_app``.

    Args:
        manager: Database manager providing the session factory.
    """

    def __init__(self, manager: DatabaseManager) -> None:
        super().__init__()
        self._manager = manager
        self._loaded: set[str] = set()
        # domain -> key -> encoded value, None marks a pending delete
        self._pending: dict[str, dict[str, str | None]] = {}
        self._schema_ready = False

    def _ensure_schema(self, session: Session) -> None:
        if not self._schema_ready:
            session.execute(_CREATE_TABLE)
            self._schema_ready = True

    def _decode_rows(self, name: str, rows: Sequence[Row[Any]]) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for key, raw in rows:
            try:
                values[key] = decode(raw)
            except StorageBackendError as exc:
                logger.warning("stored_value_skipped", domain=name, key=key, error=str(exc))
        return values

    def _fetch(self, name: str) -> dict[str, Any]:
        try:
            with self._manager.get_session_factory()() as session, session.begin():
                self._ensure_schema(session)
                rows = session.execute(_SELECT_DOMAIN, {"domain": name}).fetchall()
        except (SQLAlchemyError, OSError) as exc:
            raise StorageBackendError("load", str(exc), domain=name) from exc
        return self._decode_rows(name, rows)

    def _install(self, name: str, fetched: dict[str, Any]) -> None:
        """Replace the cached domain with ``fetched``, keeping pending writes."""
        with self._lock:
            cached = self._domains.get(name, {})
            for key in self._pending.get(name, {}):
                if key in cached:
                    fetched[key] = cached[key]
                else:
                    fetched.pop(key, None)
            self._domains[name] = fetched
            self._loaded.add(name)

    def _domain(self, name: str) -> dict[str, Any]:
        if name not in self._loaded:
            self._install(name, self._fetch(name))
        return super()._domain(name)

    def set_app_value(self, key: str, value: Any | None, application_id: str) -> None:
        """Write to the cache and record the change as pending.

        Raises:
            StorageBackendError: If ``value`` cannot be encoded. Nothing is
                written.
        """
        encoded = encode(value) if value is not None else None
        with self._lock:
            super().set_app_value(key, value, application_id)
            self._pending.setdefault(application_id, {})[key] = encoded

    def has_pending_changes(self) -> bool:
        """Return True if any write has not been flushed yet."""
        with self._lock:
            return any(self._pending.values())

    def _flush(self, reload: str | None = None) -> bool:
        with self._lock:
            pending = {name: dict(changes) for name, changes in self._pending.items() if changes}

        rows: Sequence[Row[Any]] = ()
        try:
            with self._manager.get_session_factory()() as session, session.begin():
                self._ensure_schema(session)
                for name, changes in pending.items():
                    for key, encoded in changes.items():
                        params = {"domain": name, "key": key}
                        if encoded is None:
                            session.execute(_DELETE, params)
                        else:
                            session.execute(_UPSERT, {**params, "value": encoded})
                if reload is not None:
                    rows = session.execute(_SELECT_DOMAIN, {"domain": reload}).fetchall()
        except (SQLAlchemyError, OSError) as exc:
            logger.warning(
                "preferences_flush_failed",
                error=str(exc),
                pending_domains=sorted(pending),
            )
            return False

        with self._lock:
            for name, changes in pending.items():
                current = self._pending.get(name, {})
                for key, encoded in changes.items():
                    # A newer write to the same key stays pending.
                    if key in current and current[key] == encoded:
                        del current[key]
                if not current:
                    self._pending.pop(name, None)

        if reload is not None:
            self._install(reload, self._decode_rows(reload, rows))
        logger.debug(
            "preferences_flushed",
            flushed=sum(len(changes) for changes in pending.values()),
            reloaded=reload,
        )
        return True

    def synchronize_app(self, application_id: str) -> bool:
        """Flush every pending write and reload ``application_id``.

        Returns:
            True on success, False if the database is unavailable. Pending
            writes are kept for the next attempt.
        """
        return self._flush(reload=application_id)

    def close(self) -> None:
        """Flush pending writes and dispose of the database engine."""
        if self.has_pending_changes() and not self._flush():
            logger.warning("preferences_lost_on_close", domains=sorted(self._pending))
        self._manager.dispose()
