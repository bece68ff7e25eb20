"""Bottom status bar: last status message plus key hints for the active page."""

from __future__ import annotations

from ..actions import Action, AppContext, AppStatus, StatusKind, SwitchAppContext, UpdateAppState
from ..render import RESET_SGR, Frame, build_status_line
from .base import Component

_KIND_SGR = {
    StatusKind.DONE: "\033[32m",
    StatusKind.FAILURE: "\033[31m",
    StatusKind.WORKING: "\033[33m",
}

KEY_HINTS = {
    AppContext.EXPLORER: "Enter open | Bksp up | ^F search | ^A info | ^U home | ^Q quit",
    AppContext.SEARCH: "Enter search | Tab mode | Esc back | ^Q quit",
    AppContext.RESULTS: "^A info | ^E export | Esc back | ^Q quit",
    AppContext.NOT_ACTIVE: "^Q quit",
}


class StatusBar(Component):
    def __init__(self) -> None:
        self.status = AppStatus.done("")
        self.context = AppContext.EXPLORER

    def update(self, action: Action) -> Action | None:
        if isinstance(action, UpdateAppState):
            self.status = action.status
        elif isinstance(action, SwitchAppContext):
            self.context = action.context
            self.status = AppStatus.done("")
        return None

    def render(self, frame: Frame) -> None:
        if frame.height <= 0:
            return
        line = build_status_line(f" {self.status.message}", frame.width, KEY_HINTS[self.context] + " ")
        frame.set_row(frame.height - 1, f"{_KIND_SGR[self.status.kind]}\033[7m{line}{RESET_SGR}")


__all__ = ["KEY_HINTS", "StatusBar"]
