"""Frame composition for the terminal view.

Components draw into a ``Frame`` (one string per terminal row); the runtime
writes the composed frame in a single ``os.write`` call. Rendering only reads
component state.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

from .ansi import clip_ansi_line, display_width, pad_ansi_line

SELECTED_SGR = "\033[7m"
HEADER_SGR = "\033[1m"
DIM_SGR = "\033[2m"
RESET_SGR = "\033[0m"


@dataclass
class Frame:
    width: int
    height: int
    rows: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.rows:
            self.rows = [""] * max(0, self.height)

    @property
    def list_height(self) -> int:
        """Rows available between the header row and the status bar."""
        return max(0, self.height - 2)

    def set_row(self, row: int, text: str) -> None:
        if 0 <= row < self.height:
            self.rows[row] = clip_ansi_line(text, self.width)

    def overlay_box(self, title: str, lines: list[str]) -> None:
        """Draw a bordered box centered over the current rows."""
        inner_width = max([display_width(title) + 2] + [display_width(line) for line in lines]) + 2
        inner_width = min(inner_width, max(0, self.width - 2))
        box_height = len(lines) + 2
        if inner_width <= 0 or box_height > self.height:
            return
        top = max(0, (self.height - box_height) // 2)
        left = max(0, (self.width - inner_width - 2) // 2)
        margin = " " * left
        heading = clip_ansi_line(f" {title} ", inner_width)
        self.set_row(top, f"{margin}┌{heading}{'─' * (inner_width - display_width(heading))}┐")
        for offset, line in enumerate(lines, start=1):
            self.set_row(top + offset, f"{margin}│{pad_ansi_line(' ' + line, inner_width)}│")
        self.set_row(top + box_height - 1, f"{margin}└{'─' * inner_width}┘")


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text
    return SELECTED_SGR + text.replace(RESET_SGR, "\033[0;7m") + RESET_SGR


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def compose_frame(frame: Frame) -> str:
    out: list[str] = ["\033[H"]
    for index, row in enumerate(frame.rows):
        out.append(row)
        if "\033" in row:
            out.append(RESET_SGR)
        out.append("\033[K")
        if index < len(frame.rows) - 1:
            out.append("\r\n")
    return "".join(out)


def write_frame(frame: Frame, fd: int | None = None) -> None:
    target = sys.stdout.fileno() if fd is None else fd
    os.write(target, compose_frame(frame).encode("utf-8", errors="replace"))


__all__ = [
    "Frame",
    "build_status_line",
    "compose_frame",
    "selected_with_ansi",
    "write_frame",
]
