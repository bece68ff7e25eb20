"""Unbounded multi-producer, single-consumer Action channel.

The receiving side is owned by the dispatch loop. Producers hold an
``ActionSender`` and learn about a closed receiver through ``ChannelClosed``.
"""

from __future__ import annotations

import threading
from queue import Empty, SimpleQueue
from typing import Generic, TypeVar

T = TypeVar("T")


class ChannelClosed(Exception):
    """Raised when sending into a channel whose receiver has been closed."""


class _ChannelState(Generic[T]):
    def __init__(self) -> None:
        self.queue: SimpleQueue[T] = SimpleQueue()
        self.lock = threading.Lock()
        self.closed = False


class ActionSender(Generic[T]):
    """Cloneable producer handle."""

    def __init__(self, state: _ChannelState[T]) -> None:
        self._state = state

    def send(self, item: T) -> None:
        with self._state.lock:
            if self._state.closed:
                raise ChannelClosed("receiver has been closed")
            self._state.queue.put(item)

    def clone(self) -> ActionSender[T]:
        return ActionSender(self._state)


class ActionReceiver(Generic[T]):
    """Single consumer handle; items come out in send order."""

    def __init__(self, state: _ChannelState[T]) -> None:
        self._state = state

    def try_recv(self) -> T | None:
        """Return the next queued item without blocking, or ``None`` when empty."""
        try:
            return self._state.queue.get_nowait()
        except Empty:
            return None

    def recv(self, timeout: float | None = None) -> T | None:
        try:
            return self._state.queue.get(timeout=timeout)
        except Empty:
            return None

    def close(self) -> None:
        with self._state.lock:
            self._state.closed = True

    @property
    def closed(self) -> bool:
        return self._state.closed


def unbounded_channel() -> tuple[ActionSender[T], ActionReceiver[T]]:
    state: _ChannelState[T] = _ChannelState()
    return ActionSender(state), ActionReceiver(state)


__all__ = ["ActionReceiver", "ActionSender", "ChannelClosed", "unbounded_channel"]
