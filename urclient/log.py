"""Process-wide logging with pluggable handlers and a level threshold."""

from __future__ import annotations

import abc
import enum
import sys
import threading


class LogLevel(enum.IntEnum):
    """Severity of a log message; higher values are more severe."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4


class LogHandler(abc.ABC):
    """Receives every log message that passes the level threshold."""

    @abc.abstractmethod
    def log(self, file: str, line: int, loglevel: LogLevel, message: str) -> None:
        """Handle one formatted log message."""


class DefaultLogHandler(LogHandler):
    """Prints log messages to standard output."""

    def log(self, file: str, line: int, loglevel: LogLevel, message: str) -> None:
        try:
            level = LogLevel(loglevel)
        except ValueError:
            return
        print(f"{level.name} {file} {line}: {message} ", flush=True)


_lock = threading.Lock()
_handler: LogHandler = DefaultLogHandler()
_level: LogLevel = LogLevel.WARN


def register_log_handler(handler: LogHandler | None) -> None:
    """Route all further log messages to ``handler``."""
    global _handler
    with _lock:
        _handler = handler if handler is not None else DefaultLogHandler()


def unregister_log_handler() -> None:
    """Restore the default handler that prints to standard output."""
    global _handler
    with _lock:
        _handler = DefaultLogHandler()


def set_log_level(level: LogLevel) -> None:
    """Set the minimum level a message needs to be passed on."""
    global _level
    _level = LogLevel(level)


def get_log_level() -> LogLevel:
    """Return the current minimum level."""
    return _level


def log(file: str, line: int, level: LogLevel, fmt: str, *args: object) -> None:
    """Format ``fmt`` with ``args`` printf-style and pass it to the handler."""
    if level < _level:
        return
    message = fmt % args if args else fmt
    with _lock:
        handler = _handler
    handler.log(file, line, LogLevel(level), message)


def _log_from_caller(level: LogLevel, fmt: str, args: tuple) -> None:
    frame = sys._getframe(2)
    log(frame.f_code.co_filename, frame.f_lineno, level, fmt, *args)


def debug(fmt: str, *args: object) -> None:
    """Log at DEBUG level with the caller's file and line."""
    _log_from_caller(LogLevel.DEBUG, fmt, args)


def info(fmt: str, *args: object) -> None:
    """Log at INFO level with the caller's file and line."""
    _log_from_caller(LogLevel.INFO, fmt, args)


def warn(fmt: str, *args: object) -> None:
    """Log at WARN level with the caller's file and line."""
    _log_from_caller(LogLevel.WARN, fmt, args)


def error(fmt: str, *args: object) -> None:
    """Log at ERROR level with the caller's file and line."""
    _log_from_caller(LogLevel.ERROR, fmt, args)


def fatal(fmt: str, *args: object) -> None:
    """Log at FATAL level with the caller's file and line."""
    _log_from_caller(LogLevel.FATAL, fmt, args)