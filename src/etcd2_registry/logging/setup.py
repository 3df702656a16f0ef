"""Builders for the root logging configuration and the adapter event logger."""

from __future__ import annotations

from .impl.events import StandardLoggingEventLogger
from .impl.standard import StandardLoggingConfigurator
from .protocol import LoggingConfiguratorProtocol, LoggingEventLoggerProtocol
from .settings import LoggingSettings, load_logging_settings


def build_logging_configurator(
    settings: LoggingSettings | None = None,
) -> LoggingConfiguratorProtocol:
    return StandardLoggingConfigurator(settings or load_logging_settings())


def configure_logging(
    settings: LoggingSettings | None = None,
) -> LoggingConfiguratorProtocol:
    """Install JSON handlers on the root logger; repeat calls are no-ops."""
    configurator = build_logging_configurator(settings)
    configurator.configure()
    return configurator


def build_event_logger() -> LoggingEventLoggerProtocol:
    return StandardLoggingEventLogger()


# One shared instance; registry modules bind it at import time.
_REGISTRY_EVENT_LOGGER = build_event_logger()


def get_event_logger() -> LoggingEventLoggerProtocol:
    """Event logger shared by the registry adapter and the CLI."""
    return _REGISTRY_EVENT_LOGGER
