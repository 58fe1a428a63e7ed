"""Level-suggesting logger used by chroniclers and overseers."""

from __future__ import annotations

import logging

TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")


class DefaultLogger:
    """Forwards messages to a standard library logger at a suggested level."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger if logger is not None else logging.getLogger("godoit")

    def _emit(self, level: int, msg: str, err: BaseException | None = None) -> None:
        if err is None:
            self.logger.log(level, "%s", msg)
        else:
            self.logger.log(level, "%s: %s", msg, err)

    def trace(self, msg: str) -> None:
        """Log at trace level."""
        self._emit(TRACE_LEVEL, msg)

    def debug(self, msg: str) -> None:
        """Log at debug level."""
        self._emit(logging.DEBUG, msg)

    def info(self, msg: str) -> None:
        """Log at info level."""
        self._emit(logging.INFO, msg)

    def warn(self, msg: str, err: BaseException | None) -> None:
        """Log at warning level, with the error that caused it."""
        self._emit(logging.WARNING, msg, err)

    def error(self, msg: str, err: BaseException | None) -> None:
        """Log at error level, with the error that caused it."""
        self._emit(logging.ERROR, msg, err)

    def fatal(self, msg: str, err: BaseException | None) -> None:
        """Log at critical level; the process is not stopped."""
        self._emit(logging.CRITICAL, msg, err)