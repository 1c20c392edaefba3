"""Synchronous database engine and session management.

Usage:
    from placita.infra.persistence.database import DatabaseManager

    manager = DatabaseManager("sqlite:////home/me/.config/placita/preferences.sqlite3")
    session_factory = manager.get_session_factory()
    with session_factory() as session, session.begin():
        ...
    manager.dispose()
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import Session, sessionmaker

if TYPE_CHECKING:
    from placita.infra.persistence.settings import PreferencesSettings


class DatabaseManager:
    """Encapsulates engine and session factory lifecycle.

    Multiple instances can coexist with different URLs (e.g. one per test).
    For file-based SQLite URLs the parent directory is created on first use.

    Args:
        database_url: SQLAlchemy database URL.
        echo: Echo SQL statements to the log.
    """

    def __init__(self, database_url: str, *, echo: bool = False) -> None:
        self._database_url = database_url
        self._echo = echo
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @classmethod
    def from_settings(cls, settings: PreferencesSettings) -> DatabaseManager:
        """Create a manager from preference settings."""
        return cls(settings.resolved_database_url, echo=settings.echo)

    @property
    def database_url(self) -> str:
        """The URL used by this manager."""
        return self._database_url

    def get_engine(self) -> Engine:
        """Get or create the database engine.

        Returns:
            Engine configured from this manager's URL.
        """
        if self._engine is None:
            url = make_url(self._database_url)
            if url.get_backend_name() == "sqlite":
                database = url.database
                if database and database != ":memory:":
                    Path(database).parent.mkdir(parents=True, exist_ok=True)
                self._engine = create_engine(
                    url,
                    echo=self._echo,
                    connect_args={"check_same_thread": False},
                )
            else:
                self._engine = create_engine(url, echo=self._echo, pool_pre_ping=True)
        return self._engine

    def get_session_factory(self) -> sessionmaker[Session]:
        """Get or create the session factory.

        Returns:
            Session factory bound to this manager's engine.
        """
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                self.get_engine(),
                expire_on_commit=False,
                autoflush=False,
            )
        return self._session_factory

    def dispose(self) -> None:
        """Dispose of the engine and its connection pool.

        Safe to call multiple times.
        """
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
