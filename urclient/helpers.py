"""Small system helpers."""

from __future__ import annotations

import errno
import os

from . import log


def set_fifo_scheduling(priority: int, pid: int = 0) -> bool:
    """Put ``pid`` (0 for the calling thread) under FIFO scheduling with ``priority``.

    Returns True only when the policy and priority were verified afterwards.
    """
    setscheduler = getattr(os, "sched_setscheduler", None)
    getscheduler = getattr(os, "sched_getscheduler", None)
    getparam = getattr(os, "sched_getparam", None)
    make_param = getattr(os, "sched_param", None)
    fifo = getattr(os, "SCHED_FIFO", None)
    if None in (setscheduler, getscheduler, getparam, make_param, fifo):
        log.error("FIFO scheduling is not available on this platform.")
        return False

    try:
        setscheduler(pid, fifo, make_param(priority))
    except OSError as exc:
        if exc.errno == errno.EPERM:
            log.error(
                "Your system/user seems not to be setup for FIFO scheduling. We recommend using a "
                "lowlatency kernel with FIFO scheduling. See the real-time setup documentation "
                "for details."
            )
        else:
            log.error(
                "Unsuccessful in setting thread to FIFO scheduling with priority %i. %s",
                priority,
                exc.strerror or str(exc),
            )

    try:
        policy = getscheduler(pid)
        actual_priority = getparam(pid).sched_priority
    except OSError:
        log.error("Couldn't retrieve scheduling parameters")
        return False

    if policy != fifo:
        log.error("Scheduling is NOT SCHED_FIFO!")
        return False

    log.info("SCHED_FIFO OK, priority %i", actual_priority)
    if actual_priority != priority:
        log.error(
            "Thread priority is %i instead of the expected %i", actual_priority, priority
        )
        return False
    return True