"""Exception types raised by the client library."""

from __future__ import annotations

import datetime


class UrException(RuntimeError):
    """Base class for all errors raised by this library."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)


class VersionMismatch(UrException):
    """A robot control version that is not supported was detected."""

    def __init__(self, text: str = "", version_required: int = 0, version_actual: int = 0) -> None:
        self.text = text
        self.version_required = version_required
        self.version_actual = version_actual
        super().__init__(
            f"{text}(Required version: {version_required}, actual version: {version_actual})"
        )


class ToolCommNotAvailable(VersionMismatch):
    """Communication with the tool is not possible on this robot."""


class TimeoutException(UrException):
    """An operation did not finish within its configured timeout."""

    def __init__(self, text: str, timeout: float | datetime.timedelta) -> None:
        if isinstance(timeout, datetime.timedelta):
            seconds = timeout.total_seconds()
        else:
            seconds = float(timeout)
        self.text = text
        self.timeout = seconds
        super().__init__(f"{text}(Configured timeout: {seconds:g} sec)")