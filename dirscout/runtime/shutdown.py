"""Bounded two-stage wait for a worker thread to finish."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class ShutdownTiming:
    """Poll interval, abort grace period, and hard ceiling, in seconds."""

    poll_interval: float = 0.001
    abort_after: float = 0.05
    give_up_after: float = 0.5


def wait_for_thread(
    thread: threading.Thread,
    timing: ShutdownTiming,
    on_abort: Callable[[], None],
    monotonic: Callable[[], float] = time.monotonic,
) -> bool:
    """Join ``thread`` in short polls.

    ``on_abort`` runs once when the grace period elapses with the thread still
    alive. Returns ``False`` when the thread outlived the hard ceiling.
    """
    started = monotonic()
    aborted = False
    while thread.is_alive():
        elapsed = monotonic() - started
        if elapsed >= timing.give_up_after:
            return False
        if not aborted and elapsed >= timing.abort_after:
            aborted = True
            on_abort()
        thread.join(timeout=timing.poll_interval)
    return True


__all__ = ["ShutdownTiming", "wait_for_thread"]
