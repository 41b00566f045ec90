import datetime

from urclient.exceptions import (
    TimeoutException,
    ToolCommNotAvailable,
    UrException,
    VersionMismatch,
)


def test_ur_exception_message():
    exc = UrException("something failed")
    assert str(exc) == "something failed"


def test_ur_exception_is_runtime_error():
    exc = UrException()
    assert str(exc) == ""
    assert isinstance(exc, RuntimeError)


def test_version_mismatch_message():
    exc = VersionMismatch("Too old. ", 3, 1)
    assert str(exc) == "Too old. (Required version: 3, actual version: 1)"
    assert exc.version_required == 3
    assert exc.version_actual == 1


def test_version_mismatch_defaults():
    assert str(VersionMismatch()) == "(Required version: 0, actual version: 0)"


def test_tool_comm_not_available_is_version_mismatch():
    exc = ToolCommNotAvailable("No tool. ", 5, 3)
    assert str(exc) == "No tool. (Required version: 5, actual version: 3)"
    assert exc.version_required == 5
    assert exc.version_actual == 3
    assert isinstance(exc, VersionMismatch)
    assert isinstance(exc, UrException)


def test_timeout_exception_seconds():
    exc = TimeoutException("Waited. ", 1.5)
    assert str(exc) == "Waited. (Configured timeout: 1.5 sec)"
    assert exc.timeout == 1.5


def test_timeout_exception_timedelta():
    exc = TimeoutException("Waited. ", datetime.timedelta(seconds=2, microseconds=500000))
    assert exc.timeout == 2.5
    assert str(exc).endswith("2.5 sec)")


def test_timeout_exception_whole_seconds_without_fraction():
    assert str(TimeoutException("x", 10)) == "x(Configured timeout: 10 sec)"