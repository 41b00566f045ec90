import errno
import os
from types import SimpleNamespace
from unittest import mock

import pytest

from urclient import log
from urclient.helpers import set_fifo_scheduling

FIFO = 1
OTHER = 0


class _Collector(log.LogHandler):
    def __init__(self):
        self.messages = []

    def log(self, file, line, loglevel, message):
        self.messages.append((loglevel, message))


@pytest.fixture
def collected():
    handler = _Collector()
    log.register_log_handler(handler)
    yield handler
    log.unregister_log_handler()


def _scheduling(policy, priority, set_error=None, get_error=None):
    setter = mock.Mock(side_effect=set_error)
    patcher = mock.patch.multiple(
        os,
        create=True,
        SCHED_FIFO=FIFO,
        sched_param=lambda p: SimpleNamespace(sched_priority=p),
        sched_setscheduler=setter,
        sched_getscheduler=mock.Mock(return_value=policy, side_effect=get_error),
        sched_getparam=mock.Mock(return_value=SimpleNamespace(sched_priority=priority)),
    )
    return patcher, setter


def test_success_returns_true():
    patcher, setter = _scheduling(FIFO, 50)
    with patcher:
        assert set_fifo_scheduling(50) is True
    pid, policy, param = setter.call_args.args
    assert (pid, policy, param.sched_priority) == (0, FIFO, 50)


def test_pid_is_passed_through():
    patcher, setter = _scheduling(FIFO, 10)
    with patcher:
        assert set_fifo_scheduling(10, 4321) is True
    assert setter.call_args.args[0] == 4321


def test_permission_error_is_reported(collected):
    patcher, _ = _scheduling(OTHER, 0, set_error=PermissionError(errno.EPERM, "denied"))
    with patcher:
        assert set_fifo_scheduling(50) is False
    texts = [message for _, message in collected.messages]
    assert any("not to be setup for FIFO scheduling" in text for text in texts)
    assert "Scheduling is NOT SCHED_FIFO!" in texts


def test_other_error_is_reported(collected):
    patcher, _ = _scheduling(OTHER, 0, set_error=OSError(errno.EINVAL, "Invalid argument"))
    with patcher:
        assert set_fifo_scheduling(50) is False
    texts = [message for _, message in collected.messages]
    assert any(
        text.startswith("Unsuccessful in setting thread to FIFO scheduling with priority 50.")
        for text in texts
    )


def test_wrong_priority_is_detected(collected):
    patcher, _ = _scheduling(FIFO, 20)
    with patcher:
        assert set_fifo_scheduling(30) is False
    texts = [message for _, message in collected.messages]
    assert "Thread priority is 20 instead of the expected 30" in texts


def test_unreadable_parameters(collected):
    patcher, _ = _scheduling(FIFO, 50, get_error=OSError(errno.ESRCH, "No such process"))
    with patcher:
        assert set_fifo_scheduling(50) is False
    texts = [message for _, message in collected.messages]
    assert "Couldn't retrieve scheduling parameters" in texts


def test_unavailable_platform(monkeypatch, collected):
    monkeypatch.delattr(os, "sched_setscheduler", raising=False)
    assert set_fifo_scheduling(50) is False
    assert collected.messages[-1][0] == log.LogLevel.ERROR