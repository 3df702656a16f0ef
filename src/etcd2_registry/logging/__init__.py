"""Logging setup shared by the adapter and the CLI."""

from .protocol import LoggingConfiguratorProtocol, LoggingEventLoggerProtocol
from .settings import LoggingSettings, load_logging_settings
from .setup import (
    build_event_logger,
    build_logging_configurator,
    configure_logging,
    get_event_logger,
)

__all__ = [
    "LoggingConfiguratorProtocol",
    "LoggingEventLoggerProtocol",
    "LoggingSettings",
    "build_event_logger",
    "build_logging_configurator",
    "configure_logging",
    "get_event_logger",
    "load_logging_settings",
]
