"""Component contract shared by every view."""

from __future__ import annotations

import logging

from ..actions import Action
from ..render import Frame
from ..runtime.channel import ActionSender, ChannelClosed
from ..runtime.events import Event, KeyEvent

logger = logging.getLogger(__name__)


class Component:
    """A view with its own state, driven by events and Actions.

    ``handle_event`` and ``update`` may each return at most one follow-up
    Action; the dispatch loop feeds it back onto the bus. Extra Actions that
    must precede it go out through ``send_action``.
    """

    _action_sender: ActionSender[Action] | None = None

    def register_action_sender(self, sender: ActionSender[Action]) -> None:
        self._action_sender = sender

    def send_action(self, action: Action) -> None:
        if self._action_sender is None:
            return
        try:
            self._action_sender.send(action)
        except ChannelClosed:
            logger.error("dropped %s: action channel closed", type(action).__name__)

    def init_size(self, width: int, height: int) -> None:
        return None

    def handle_event(self, event: Event) -> Action | None:
        if isinstance(event, KeyEvent):
            return self.handle_key(event.key)
        return None

    def handle_key(self, key: str) -> Action | None:
        return None

    def update(self, action: Action) -> Action | None:
        return None

    def render(self, frame: Frame) -> None:
        return None


def is_enter(key: str) -> bool:
    return key in {"ENTER_CR", "ENTER_LF"}


def is_printable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def list_height_for(terminal_height: int) -> int:
    """Rows left for a list after its header row and the status bar."""
    return max(0, terminal_height - 2)


__all__ = ["Component", "is_enter", "is_printable", "list_height_for"]
