"""Preference store configuration using Pydantic settings.

Settings are loaded from environment variables with the ``PLACITA_`` prefix
(or a ``.env`` file) and validated using Pydantic.
"""

from __future__ import annotations

import os
import sys
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_APPLICATION_ID = "placita"
DATABASE_FILENAME = "preferences.sqlite3"


def _default_application_id() -> str:
    """Derive the application identity from the running script name."""
    script = Path(sys.argv[0]).stem if sys.argv and sys.argv[0] else ""
    return script or DEFAULT_APPLICATION_ID


def _default_data_dir() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "placita"


class PreferencesSettings(BaseSettings):
    """Configuration for the standard preference store.

    Environment Variables:
        PLACITA_APPLICATION_ID: Application identity (default: script name)
        PLACITA_BACKEND: Storage backend, ``sql`` or ``memory`` (default: sql)
        PLACITA_DATA_DIR: Directory for the default SQLite database
            (default: ``$XDG_CONFIG_HOME/placita`` or ``~/.config/placita``)
        PLACITA_DATABASE_URL: SQLAlchemy URL; overrides the SQLite default
        PLACITA_ARCHIVE_FILE_REFERENCES: Archive paths written with
            ``set_url`` as data (default: false)
        PLACITA_ECHO: Echo SQL statements to the log (default: false)
        PLACITA_CONFIGURE_LOGGING: Configure structlog when the standard
            store is first created (default: false)

    Example:
        >>> settings = PreferencesSettings(application_id="com.example.editor", data_dir="/tmp/prefs")
        >>> settings.resolved_database_url
        'sqlite:////tmp/prefs/preferences.sqlite3'
    """

    model_config = SettingsConfigDict(
        env_prefix="PLACITA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    application_id: str = Field(
        default_factory=_default_application_id,
        description="Identity of the running application",
    )
    backend: Literal["sql", "memory"] = Field(
        default="sql",
        description="Storage backend implementation",
    )
    data_dir: Path = Field(
        default_factory=_default_data_dir,
        description="Directory holding the default SQLite database",
    )
    database_url: str | None = Field(
        default=None,
        repr=False,
        description="SQLAlchemy database URL (overrides the SQLite default)",
    )
    archive_file_references: bool = Field(
        default=False,
        description="Archive file references written with set_url as data",
    )
    echo: bool = Field(default=False, description="Echo SQL statements to log")
    configure_logging: bool = Field(
        default=False,
        description="Configure structlog when the standard store is created",
    )

    @field_validator("application_id")
    @classmethod
    def validate_application_id(cls, v: str) -> str:
        """Strip whitespace and reject empty identities."""
        stripped = v.strip()
        if not stripped:
            msg = "application_id must not be empty"
            raise ValueError(msg)
        return stripped

    @model_validator(mode="after")
    def _validate_database_url(self) -> PreferencesSettings:
        """Validate the effective connection URL is parseable by SQLAlchemy."""
        from sqlalchemy.engine.url import make_url

        try:
            make_url(self.resolved_database_url)
        except Exception as exc:
            msg = f"Invalid database connection URL: {exc}"
            raise ValueError(msg) from exc
        return self

    @property
    def resolved_database_url(self) -> str:
        """Effective database URL.

        Returns:
            ``database_url`` when set, otherwise a SQLite file in ``data_dir``.
        """
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.data_dir / DATABASE_FILENAME}"


@lru_cache(maxsize=1)
def get_preferences_settings() -> PreferencesSettings:
    """Get cached PreferencesSettings instance.

    Clear cache with ``get_preferences_settings.cache_clear()`` for testing.

    Returns:
        Singleton PreferencesSettings instance.
    """
    return PreferencesSettings()
