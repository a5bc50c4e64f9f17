"""Level-filtered SQL logger that writes through a standard ``logging`` logger."""

from __future__ import annotations

import copy
import logging
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Callable

_SLOW_THRESHOLD = timedelta(seconds=1)


class LogLevel(IntEnum):
    """Verbosity of the SQL logger; higher values log more."""

    SILENT = 1
    ERROR = 2
    WARN = 3
    INFO = 4


def level_from_logging(level: int) -> LogLevel:
    """Map a ``logging`` level to the SQL logger's verbosity."""
    return {
        logging.DEBUG: LogLevel.INFO,
        logging.INFO: LogLevel.INFO,
        logging.WARNING: LogLevel.WARN,
        logging.ERROR: LogLevel.ERROR,
        logging.CRITICAL: LogLevel.SILENT,
    }.get(level, LogLevel.INFO)


class SqlLogger:
    """Logs ORM messages and traced SQL statements through ``logger``."""

    def __init__(self, logger: logging.Logger, level: LogLevel | None = None) -> None:
        self.logger = logger
        if level is None:
            level = level_from_logging(logger.getEffectiveLevel())
        self.level = LogLevel(level)

    def log_mode(self, level: LogLevel) -> SqlLogger:
        """Return a copy of this logger at ``level``; this one is unchanged."""
        clone = copy.copy(self)
        clone.level = LogLevel(level)
        return clone

    def info(self, msg: str, *args: object) -> None:
        if self.level >= LogLevel.INFO:
            self.logger.info(msg, *args)

    def warn(self, msg: str, *args: object) -> None:
        if self.level >= LogLevel.WARN:
            self.logger.warning(msg, *args)

    def error(self, msg: str, *args: object) -> None:
        if self.level >= LogLevel.ERROR:
            self.logger.error(msg, *args)

    def trace(
        self,
        begin: datetime,
        fc: Callable[[], tuple[str, int]],
        error: BaseException | None,
    ) -> None:
        """Log a finished statement; ``fc`` returns its SQL and affected rows."""
        if self.level <= LogLevel.SILENT:
            return

        elapsed = datetime.now() - begin
        sql, rows = fc()
        millis = elapsed / timedelta(milliseconds=1)
        message = f"[{millis:.3f}ms] [rows:{rows}] {sql}"

        if error is not None and self.level >= LogLevel.ERROR:
            self.logger.error("%s err=%s", message, error)
        elif elapsed > _SLOW_THRESHOLD and self.level >= LogLevel.WARN:
            self.logger.warning("%s elapsed=%s", message, elapsed)
        elif self.level >= LogLevel.INFO:
            self.logger.info("%s", message)