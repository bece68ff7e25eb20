"""Terminal control for the TUI session.

Owns raw-mode lifecycle, alternate-screen switching, and focus reporting.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty


class TerminalController:
    """Switch a tty into raw alternate-screen mode and back."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._active = False

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Alternate screen, hidden cursor, focus in/out reports.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l\x1b[?1004h\x1b[2J")
        self._active = True

    def disable_tui_mode(self) -> None:
        if not self._active:
            return
        os.write(self.stdout_fd, b"\x1b[?1004l\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        self._active = False

    @contextlib.contextmanager
    def raw_mode(self):
        """Bracket the block with TUI enter/exit; the tty is restored on errors too."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


__all__ = ["TerminalController"]
