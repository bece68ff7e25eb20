"""Cooperative cancellation for background filesystem operations."""

from __future__ import annotations

import threading


class OperationCancelled(Exception):
    """Raised at a traversal check-point once the owning run was cancelled."""


class OperationAborted(OperationCancelled):
    """Raised once the supervisor gave up on a run during shutdown."""


class CancellationToken:
    """One-shot flag shared between the foreground and a single worker run."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelled()


__all__ = ["CancellationToken", "OperationAborted", "OperationCancelled"]
