"""Structured logging configuration using structlog.

Library modules log through the standard library
(``logging.getLogger(__name__)``) with snake_case event names and
structured ``extra`` fields. Calling :func:`configure_logging` routes those
records, together with records from structlog loggers obtained through
:func:`get_logger`, through one structlog processor chain:

- JSON output for production environments
- Console output for development
- Redaction of sensitive fields

Usage:
    # During application startup (opt-in)
    from placita.infra.observability.logging import configure_logging
    configure_logging()

    # In infrastructure code
    from placita.infra.observability import get_logger
    logger = get_logger(__name__)
    logger.info("backend_flushed", domains=3)
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from collections.abc import MutableMapping

Processor = structlog.types.Processor

# Sensitive field names for redaction
SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {
        "password",
        "token",
        "secret",
        "api_key",
        "apikey",
        "credential",
        "database_url",
    }
)

REDACTED_VALUE: str = "***REDACTED***"

HANDLER_NAME: str = "placita-structlog"
"""Name of the root handler installed by :func:`configure_logging`."""


class LoggingSettings(BaseSettings):
    """Logging configuration settings from environment variables.

    Loads configuration from environment variables:
    - LOG_LEVEL: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment name (development, staging, production, test)

    Attributes:
        log_level: Minimum log level to output. Default: INFO
        environment: Environment name for format selection. Default: development

    Example:
        >>> LoggingSettings(environment="production").use_json_logs
        True
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Minimum log level to output",
    )
    environment: str = Field(
        default="development",
        alias="ENVIRONMENT",
        description="Environment name for format selection",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase."""
        if isinstance(v, str):
            return v.upper()
        return str(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known level.

        Raises:
            ValueError: If log level is not a valid Python logging level.
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            msg = f"log_level must be one of {sorted(valid_levels)}"
            raise ValueError(msg)
        return v

    @property
    def use_json_logs(self) -> bool:
        """True for the production environment, False otherwise."""
        return self.environment == "production"

    @property
    def log_level_int(self) -> int:
        """Log level as a ``logging`` module constant."""
        return getattr(logging, self.log_level, logging.INFO)


class SensitiveDataProcessor:
    """Structlog processor to redact sensitive fields from log context.

    Redacts values for fields matching:
    1. Exact field names in SENSITIVE_FIELDS (case-insensitive)
    2. Field names containing "password", "secret" or "token" as substrings

    Example:
        >>> processor = SensitiveDataProcessor()
        >>> processor(None, "info", {"event": "connect", "password": "hunter2"})["password"]
        '***REDACTED***'
    """

    def __call__(
        self,
        logger: Any,
        method_name: str,
        event_dict: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        for key in list(event_dict.keys()):
            if self._is_sensitive(key):
                event_dict[key] = REDACTED_VALUE
        return event_dict

    def _is_sensitive(self, key: str) -> bool:
        key_lower = key.lower()
        if key_lower in SENSITIVE_FIELDS:
            return True
        return any(part in key_lower for part in ("password", "secret", "token"))


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached LoggingSettings instance.

    Clear cache with ``get_logging_settings.cache_clear()`` for testing.

    Returns:
        Singleton LoggingSettings instance.
    """
    return LoggingSettings()


def _shared_processors() -> list[Processor]:
    """Processors applied to both structlog and stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        SensitiveDataProcessor(),
    ]


def _build_formatter(settings: LoggingSettings) -> structlog.stdlib.ProcessorFormatter:
    final: list[Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if settings.use_json_logs:
        final.append(structlog.processors.format_exc_info)
        final.append(structlog.processors.JSONRenderer())
    else:
        final.append(structlog.dev.ConsoleRenderer(colors=False))
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[structlog.stdlib.ExtraAdder(), *_shared_processors()],
        processors=final,
    )


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structlog and bridge standard library logging into it.

    Installs one stream handler on the root logger (replacing a handler
    installed by an earlier call) whose formatter runs the structlog
    processor chain. Safe to call more than once.

    Args:
        settings: Optional LoggingSettings instance. If not provided,
            settings are loaded from environment variables.

    Example:
        >>> configure_logging(LoggingSettings(log_level="DEBUG", environment="production"))
    """
    if settings is None:
        settings = get_logging_settings()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(_build_formatter(settings))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(settings.log_level_int)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to the given name.

    Args:
        name: Logger name (typically __name__ from calling module).

    Returns:
        Structlog logger backed by the standard library logger ``name``.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("backend_opened", identity="com.example.editor")
    """
    return structlog.stdlib.get_logger(name)
