"""Small levelled logger writing timestamped records to streams and a file."""

from __future__ import annotations

import enum
import inspect
import os
import sys
import time
from typing import IO, Optional

_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogLevel(enum.IntEnum):
    """Severity of a log record, ordered from least to most severe."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4


class Logger:
    """Writes records at or above ``level``; errors go to the error stream."""

    def __init__(
        self,
        level: LogLevel = LogLevel.INFO,
        stream: Optional[IO[str]] = None,
        error_stream: Optional[IO[str]] = None,
    ) -> None:
        self.level = LogLevel(level)
        self._stream = stream
        self._error_stream = error_stream
        self._log_file: Optional[IO[str]] = None

    def _out(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stderr

    def _errors(self) -> IO[str]:
        return self._error_stream if self._error_stream is not None else sys.stderr

    def set_log_file(self, filename) -> None:
        """Append every following record to ``filename`` as well."""
        self.close()
        try:
            self._log_file = open(filename, "a", encoding="utf-8")
        except OSError:
            errors = self._errors()
            errors.write(f"Logger: Could not open log file {filename}\n")
            errors.flush()

    def close(self) -> None:
        """Close the log file, if one is open."""
        if self._log_file is not None:
            self._log_file.close()
            self._log_file = None

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def log(self, level, message, file=None, line=0) -> None:
        """Write one record if ``level`` is enabled."""
        level = LogLevel(level)
        if level < self.level:
            return
        stamp = time.strftime(_TIME_FORMAT, time.localtime())
        origin = f"[{file}:{line}] " if file and line else ""
        record = f"[{stamp}] {origin}[{level.name}] {message}\n"

        output = self._errors() if level >= LogLevel.ERROR else self._out()
        output.write(record)
        output.flush()

        if self._log_file is not None:
            self._log_file.write(record)
            self._log_file.flush()

    def _log_from_caller(self, level: LogLevel, message) -> None:
        if level < self.level:
            return
        frame = inspect.currentframe()
        caller = frame.f_back.f_back if frame and frame.f_back else None
        try:
            if caller is None:
                self.log(level, message)
            else:
                self.log(
                    level,
                    message,
                    os.path.basename(caller.f_code.co_filename),
                    caller.f_lineno,
                )
        finally:
            del frame, caller

    def debug(self, message) -> None:
        self._log_from_caller(LogLevel.DEBUG, message)

    def info(self, message) -> None:
        self._log_from_caller(LogLevel.INFO, message)

    def warning(self, message) -> None:
        self._log_from_caller(LogLevel.WARNING, message)

    def error(self, message) -> None:
        self._log_from_caller(LogLevel.ERROR, message)

    def critical(self, message) -> None:
        self._log_from_caller(LogLevel.CRITICAL, message)


_default_logger = Logger()


def get_logger() -> Logger:
    """Return the logger shared by the whole package."""
    return _default_logger