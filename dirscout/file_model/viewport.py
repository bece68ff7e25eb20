"""Selection cursor plus visible-window start over an ordered list.

Single-step scrolling wraps around at both ends, paging clamps at the first
and last element. Every operation saturates on empty lists.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")


@dataclass
class Viewport:
    """Scroll state for a list of ``length`` rows shown ``window_height`` at a time."""

    length: int = 0
    selected: int = 0
    start_index: int = 0
    window_height: int = 0

    @property
    def _rows(self) -> int:
        # A zero-height window still keeps the selected row addressable.
        return max(1, self.window_height)

    def reset(self) -> None:
        self.selected = 0
        self.start_index = 0

    def set_window_height(self, height: int) -> None:
        """Update the window height.

        Callers reset the state when the height changes discontinuously, e.g.
        on terminal resize.
        """
        self.window_height = max(0, int(height))

    def scroll_down(self) -> None:
        if self.length <= 0:
            self.reset()
            return
        if self.selected >= self.length - 1:
            self.reset()
            return
        self.selected += 1
        if self.selected >= self.start_index + self._rows:
            self.start_index = self.selected - self._rows + 1

    def scroll_up(self) -> None:
        if self.length <= 0:
            self.reset()
            return
        if self.selected <= 0:
            self.selected = self.length - 1
            self.start_index = max(0, self.length - self._rows)
            return
        self.selected -= 1
        if self.selected < self.start_index:
            self.start_index = self.selected

    def page_down_by(self, height: int) -> None:
        """Move down by up to ``height`` rows, stopping at the last element."""
        steps = min(max(0, height), max(0, self.length - 1 - self.selected))
        for _ in range(steps):
            self.scroll_down()

    def page_up_by(self, height: int) -> None:
        """Move up by up to ``height`` rows, stopping at the first element."""
        steps = min(max(0, height), self.selected)
        for _ in range(steps):
            self.scroll_up()

    def go_to_index(self, index: int) -> None:
        """Select ``index`` by scrolling down from the top of the list."""
        self.reset()
        for _ in range(min(max(0, index), max(0, self.length - 1))):
            self.scroll_down()

    def at_first(self) -> bool:
        return self.selected <= 0

    def at_last(self) -> bool:
        return self.selected >= max(0, self.length - 1)

    def visible_range(self) -> range:
        end = min(self.start_index + self.window_height, self.length)
        return range(min(self.start_index, end), end)

    def visible_slice(self, items: Sequence[T]) -> Sequence[T]:
        window = self.visible_range()
        return items[window.start:window.stop]


__all__ = ["Viewport"]
