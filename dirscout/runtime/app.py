"""Composition root for an interactive session.

Wires the terminal, the action channel, both background tasks, and the
components into one dispatch loop.
"""

from __future__ import annotations

import shutil
import sys
from collections.abc import Sequence

from ..actions import Action
from ..components.base import Component
from ..components.explorer import ExplorerComponent
from ..components.metadata import MetadataPopup
from ..components.results import ResultsComponent
from ..components.search import SearchComponent
from ..components.status import StatusBar
from ..config import AppConfig
from ..render import Frame, write_frame
from .channel import ActionSender, unbounded_channel
from .events import TerminalEventSource
from .explorer_task import ExplorerTask
from .export_task import ExportTask
from .loop import DispatchLoopCallbacks, LoopOutcome, run_dispatch_loop
from .terminal import TerminalController


class Screen:
    """Draws all components into one frame per render."""

    def __init__(self, components: Sequence[Component], stdout_fd: int, width: int, height: int) -> None:
        self._components = components
        self._stdout_fd = stdout_fd
        self.width = width
        self.height = height

    def resize(self, width: int, height: int) -> None:
        self.width = max(1, width)
        self.height = max(1, height)

    def draw(self) -> None:
        frame = Frame(width=self.width, height=self.height)
        for component in self._components:
            component.render(frame)
        write_frame(frame, self._stdout_fd)


def build_components(config: AppConfig, export_task: ExportTask) -> list[Component]:
    """Create components in dispatch order: pages, popup, then status bar."""
    return [
        ExplorerComponent(config.start_dir, config.follow_symlinks),
        SearchComponent(config.follow_symlinks),
        ResultsComponent(config.follow_symlinks, config.export_dir, export_task),
        MetadataPopup(),
        StatusBar(),
    ]


def register_components(components: Sequence[Component], sender: ActionSender[Action], width: int, height: int) -> None:
    for component in components:
        component.register_action_sender(sender.clone())
        component.init_size(width, height)


def run_app(config: AppConfig, tick_rate: float, frame_rate: float) -> LoopOutcome:
    """Run the TUI until the user quits; the terminal is restored on every exit path."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)

    sender, receiver = unbounded_channel()
    explorer_task = ExplorerTask(sender.clone())
    export_task = ExportTask(sender.clone())
    components = build_components(config, export_task)

    size = shutil.get_terminal_size((80, 24))
    register_components(components, sender, size.columns, size.lines)
    screen = Screen(components, stdout_fd, size.columns, size.lines)
    events = TerminalEventSource(stdin_fd, tick_rate, frame_rate)

    with terminal.raw_mode():
        return run_dispatch_loop(
            events,
            components,
            sender,
            receiver,
            explorer_task,
            DispatchLoopCallbacks(draw=screen.draw, resize=screen.resize),
            background_tasks=[export_task],
        )


__all__ = ["Screen", "build_components", "register_components", "run_app"]
