from __future__ import annotations

import logging
from collections.abc import Mapping

from ..protocol import ExcInfo, LoggingEventLoggerProtocol


class StandardLoggingEventLogger(LoggingEventLoggerProtocol):
    """Event logger backed by the stdlib ``logging`` module.

    ``stacklevel`` points records at the adapter call site rather than at
    this wrapper.
    """

    def log(
        self,
        level: int,
        message: str,
        *args: object,
        logger: logging.Logger | None = None,
        extra: Mapping[str, object] | None = None,
        exc_info: ExcInfo = None,
        stacklevel: int = 2,
    ) -> None:
        target = logger or logging.getLogger()
        kwargs: dict[str, object] = {"stacklevel": stacklevel}
        if extra is not None:
            kwargs["extra"] = extra
        if exc_info is not None:
            kwargs["exc_info"] = exc_info
        target.log(level, message, *args, **kwargs)

    def debug(
        self,
        message: str,
        *args: object,
        logger: logging.Logger | None = None,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        self.log(
            logging.DEBUG, message, *args, logger=logger, extra=extra,
            stacklevel=3,
        )

    def info(
        self,
        message: str,
        *args: object,
        logger: logging.Logger | None = None,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        self.log(
            logging.INFO, message, *args, logger=logger, extra=extra,
            stacklevel=3,
        )

    def warning(
        self,
        message: str,
        *args: object,
        logger: logging.Logger | None = None,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        self.log(
            logging.WARNING, message, *args, logger=logger, extra=extra,
            stacklevel=3,
        )

    def error(
        self,
        message: str,
        *args: object,
        logger: logging.Logger | None = None,
        extra: Mapping[str, object] | None = None,
        exc_info: ExcInfo = None,
    ) -> None:
        self.log(
            logging.ERROR,
            message,
            *args,
            logger=logger,
            extra=extra,
            exc_info=exc_info,
            stacklevel=3,
        )
