from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler

from ..protocol import LoggingConfiguratorProtocol
from ..settings import LoggingSettings

_BUILTIN_LOG_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "process": record.process,
            "thread": record.threadName,
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack_info"] = record.stack_info
        payload.update({
            key: value
            for key, value in record.__dict__.items()
            if key not in _BUILTIN_LOG_RECORD_ATTRS
        })
        return json.dumps(payload, ensure_ascii=True, default=str)


class StandardLoggingConfigurator(LoggingConfiguratorProtocol):
    _MARKER = "_etcd2_registry_logging_configured"

    def __init__(self, settings: LoggingSettings) -> None:
        self._settings = settings

    def configure(self) -> None:
        logger = logging.getLogger()
        if getattr(logger, self._MARKER, False):
            return
        logger.setLevel(self._settings.level)
        formatter = JsonFormatter()
        for handler in self._build_handlers(formatter):
            logger.addHandler(handler)
        setattr(logger, self._MARKER, True)

    def _build_handlers(
        self, formatter: logging.Formatter
    ) -> list[logging.Handler]:
        handlers: list[logging.Handler] = []
        if self._settings.console_enabled:
            console = logging.StreamHandler()
            console.setLevel(self._settings.level)
            console.setFormatter(formatter)
            handlers.append(console)

        if self._settings.error_dir:
            handlers.append(
                self._build_file_handler(
                    self._settings.error_dir,
                    "error.log",
                    level=logging.ERROR,
                    formatter=formatter,
                )
            )

        if self._settings.general_dir:
            handlers.append(
                self._build_file_handler(
                    self._settings.general_dir,
                    "registry.log",
                    level=self._settings.level,
                    formatter=formatter,
                )
            )
        return handlers

    def _build_file_handler(
        self,
        directory: str,
        filename: str,
        *,
        level: int,
        formatter: logging.Formatter,
    ) -> logging.Handler:
        os.makedirs(directory, exist_ok=True)
        handler = TimedRotatingFileHandler(
            os.path.join(directory, filename),
            when=self._settings.rotate_when,
            backupCount=self._settings.backup_count,
            encoding="utf-8",
            delay=True,
        )
        handler.setLevel(level)
        handler.setFormatter(formatter)
        return handler
