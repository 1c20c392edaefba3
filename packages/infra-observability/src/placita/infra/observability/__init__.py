"""Placita Infra Observability -- structlog logging configuration."""

from __future__ import annotations

from placita.infra.observability.logging import (
    LoggingSettings,
    SensitiveDataProcessor,
    configure_logging,
    get_logger,
    get_logging_settings,
)

__all__ = [
    "LoggingSettings",
    "SensitiveDataProcessor",
    "configure_logging",
    "get_logger",
    "get_logging_settings",
]
