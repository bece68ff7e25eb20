"""Terminal event source feeding the dispatch loop.

Merges key input, terminal resizes, and two periodic timers (a slow app tick
and a faster render tick) into one stream of ``Event`` values.
"""

from __future__ import annotations

import shutil
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, Union

from ..input import read_key


@dataclass(frozen=True)
class KeyEvent:
    key: str


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


@dataclass(frozen=True)
class TickEvent:
    pass


@dataclass(frozen=True)
class RenderEvent:
    pass


@dataclass(frozen=True)
class FocusGained:
    pass


@dataclass(frozen=True)
class FocusLost:
    pass


Event = Union[KeyEvent, ResizeEvent, TickEvent, RenderEvent, FocusGained, FocusLost]


class EventSource(Protocol):
    def next_event(self) -> Event:
        ...


class TerminalEventSource:
    """Blocking event source over a raw-mode terminal file descriptor."""

    def __init__(
        self,
        stdin_fd: int,
        tick_rate: float,
        frame_rate: float,
        *,
        read_key_fn: Callable[[int, int | None], str] = read_key,
        terminal_size: Callable[[], tuple[int, int]] | None = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._stdin_fd = stdin_fd
        self._tick_interval = 1.0 / max(tick_rate, 0.001)
        self._render_interval = 1.0 / max(frame_rate, 0.001)
        self._read_key = read_key_fn
        self._terminal_size = terminal_size or _terminal_size
        self._monotonic = monotonic
        now = monotonic()
        self._next_tick = now + self._tick_interval
        self._next_render = now
        self._last_size = self._terminal_size()
        self._queued: deque[Event] = deque()

    def next_event(self) -> Event:
        while not self._queued:
            self._poll()
        return self._queued.popleft()

    def _poll(self) -> None:
        size = self._terminal_size()
        if size != self._last_size:
            self._last_size = size
            self._queued.append(ResizeEvent(width=size[0], height=size[1]))

        now = self._monotonic()
        if now >= self._next_tick:
            self._next_tick = now + self._tick_interval
            self._queued.append(TickEvent())
        if now >= self._next_render:
            self._next_render = now + self._render_interval
            self._queued.append(RenderEvent())
        if self._queued:
            return

        wait_seconds = min(self._next_tick, self._next_render) - now
        key = self._read_key(self._stdin_fd, max(0, int(wait_seconds * 1000)))
        if not key:
            return
        if key == "FOCUS_IN":
            self._queued.append(FocusGained())
        elif key == "FOCUS_OUT":
            self._queued.append(FocusLost())
        else:
            self._queued.append(KeyEvent(key))


def _terminal_size() -> tuple[int, int]:
    size = shutil.get_terminal_size((80, 24))
    return size.columns, size.lines


__all__ = [
    "Event",
    "EventSource",
    "FocusGained",
    "FocusLost",
    "KeyEvent",
    "RenderEvent",
    "ResizeEvent",
    "TerminalEventSource",
    "TickEvent",
]
