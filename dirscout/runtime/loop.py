"""Single-threaded dispatch loop.

Each iteration waits for one external event, offers it to every component,
maps it to a canonical Action, then drains the Action channel until no
follow-up Actions remain. Waiting on the event source is the only blocking
call on this path.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from ..actions import (
    Action,
    Error,
    ExplorerRequest,
    ForcedShutdown,
    Init,
    LoadDir,
    LoadDirMetadata,
    NoOp,
    Quit,
    Render,
    Resize,
    Resume,
    StartSearch,
    Suspend,
    Tick,
)
from ..components.base import Component
from .channel import ActionReceiver, ActionSender
from .events import Event, EventSource, FocusGained, FocusLost, KeyEvent, RenderEvent, ResizeEvent, TickEvent

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"CTRL_Q", "CTRL_C"})
MAX_ACTIONS_PER_DRAIN = 10_000


class AppError(Exception):
    """Unrecoverable error raised out of the loop by an ``Error`` Action."""


class RequestSupervisor(Protocol):
    def submit(self, request: ExplorerRequest) -> None:
        ...

    def stop(self) -> bool:
        ...

    @property
    def is_forced_shutdown(self) -> bool:
        ...


class BackgroundTask(Protocol):
    def stop(self) -> bool:
        ...


@dataclass(frozen=True)
class DispatchLoopCallbacks:
    """Loop-owned side effects, injected so tests can observe them."""

    draw: Callable[[], None]
    resize: Callable[[int, int], None]


@dataclass(frozen=True)
class LoopOutcome:
    forced_shutdown: bool


def map_event(event: Event) -> Action:
    """Translate a raw event into the canonical Action the loop posts for it."""
    if isinstance(event, KeyEvent):
        return Quit() if event.key in QUIT_KEYS else NoOp()
    if isinstance(event, ResizeEvent):
        return Resize(event.width, event.height)
    if isinstance(event, TickEvent):
        return Tick()
    if isinstance(event, RenderEvent):
        return Render()
    if isinstance(event, FocusGained):
        return Resume()
    if isinstance(event, FocusLost):
        return Suspend()
    return NoOp()


class LoopState:
    def __init__(self) -> None:
        self.should_quit = False
        self.forced_shutdown = False


def _apply_loop_effects(
    action: Action,
    state: LoopState,
    supervisor: RequestSupervisor,
    callbacks: DispatchLoopCallbacks,
) -> None:
    if isinstance(action, Quit):
        state.should_quit = True
    elif isinstance(action, ForcedShutdown):
        state.forced_shutdown = True
    elif isinstance(action, Render):
        callbacks.draw()
    elif isinstance(action, Resize):
        callbacks.resize(action.width, action.height)
        callbacks.draw()
    elif isinstance(action, Error):
        raise AppError(action.message)
    elif isinstance(action, (LoadDir, LoadDirMetadata, StartSearch)):
        supervisor.submit(action)


def drain_actions(
    receiver: ActionReceiver[Action],
    sender: ActionSender[Action],
    components: Sequence[Component],
    supervisor: RequestSupervisor,
    callbacks: DispatchLoopCallbacks,
    state: LoopState,
    max_actions: int = MAX_ACTIONS_PER_DRAIN,
) -> int:
    """Process queued Actions in FIFO order until the channel is empty.

    Follow-ups returned by components are queued behind the current backlog.
    ``max_actions`` bounds one pass so a fast producer cannot starve event
    handling. Returns the number of Actions processed.
    """
    processed = 0
    while processed < max_actions:
        action = receiver.try_recv()
        if action is None:
            break
        processed += 1
        _apply_loop_effects(action, state, supervisor, callbacks)
        for component in components:
            follow_up = component.update(action)
            if follow_up is not None:
                sender.send(follow_up)
    return processed


def run_dispatch_loop(
    event_source: EventSource,
    components: Sequence[Component],
    sender: ActionSender[Action],
    receiver: ActionReceiver[Action],
    supervisor: RequestSupervisor,
    callbacks: DispatchLoopCallbacks,
    max_actions_per_drain: int = MAX_ACTIONS_PER_DRAIN,
    background_tasks: Sequence[BackgroundTask] = (),
) -> LoopOutcome:
    """Run until a ``Quit`` Action has been processed and the channel is empty.

    The supervisor and then ``background_tasks`` are stopped on every exit
    path; an ``Error`` Action surfaces as ``AppError``.
    """
    state = LoopState()
    sender.send(Init())
    try:
        while True:
            processed = drain_actions(receiver, sender, components, supervisor, callbacks, state, max_actions_per_drain)
            if state.should_quit:
                while processed >= max_actions_per_drain:
                    processed = drain_actions(
                        receiver, sender, components, supervisor, callbacks, state, max_actions_per_drain
                    )
                break

            event = event_source.next_event()
            for component in components:
                emitted = component.handle_event(event)
                if emitted is not None:
                    sender.send(emitted)
            sender.send(map_event(event))
    finally:
        finished = supervisor.stop()
        for task in background_tasks:
            finished = task.stop() and finished
        receiver.close()

    forced = state.forced_shutdown or not finished or supervisor.is_forced_shutdown
    if forced:
        logger.warning("dispatch loop exited with forced shutdown")
    else:
        logger.info("dispatch loop exited")
    return LoopOutcome(forced_shutdown=forced)


__all__ = [
    "AppError",
    "BackgroundTask",
    "DispatchLoopCallbacks",
    "LoopOutcome",
    "LoopState",
    "MAX_ACTIONS_PER_DRAIN",
    "QUIT_KEYS",
    "RequestSupervisor",
    "drain_actions",
    "map_event",
    "run_dispatch_loop",
]
