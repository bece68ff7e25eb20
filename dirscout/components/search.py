"""Search page: query editing, mode toggle, and query history."""

from __future__ import annotations

from pathlib import Path

from ..actions import (
    Action,
    AppContext,
    AppStatus,
    RequestFailed,
    RequestSuperseded,
    SearchDone,
    ShowResultsPage,
    ShowSearchPage,
    StartSearch,
    SwitchAppContext,
    UpdateAppState,
    next_request_id,
)
from ..file_model.paths import display_path
from ..file_model.search import SearchMode
from ..render import DIM_SGR, HEADER_SGR, RESET_SGR, Frame
from .base import Component, is_enter, is_printable

EMPTY_QUERY = "Search query must not be empty"
NO_MATCHES = "No matches found"


class SearchComponent(Component):
    def __init__(self, follow_symlinks: bool) -> None:
        self.follow_symlinks = follow_symlinks
        self.context = AppContext.EXPLORER
        self.cwd: Path | None = None
        self.cwd_display_name = ""
        self.mode = SearchMode.FLAT
        self.query = ""
        self.cursor = 0
        self.history: list[str] = []
        self.history_index: int | None = None
        self.waiting_for: int | None = None

    @property
    def accepts_keys(self) -> bool:
        return self.context is AppContext.SEARCH and self.waiting_for is None

    def reset(self) -> None:
        self.query = ""
        self.cursor = 0
        self.history_index = None

    def insert_char(self, character: str) -> None:
        if character.isspace():
            return
        self.query = self.query[: self.cursor] + character + self.query[self.cursor :]
        self.cursor += 1

    def delete_left(self) -> None:
        if self.cursor == 0:
            return
        self.query = self.query[: self.cursor - 1] + self.query[self.cursor :]
        self.cursor -= 1

    def delete_right(self) -> None:
        if self.cursor >= len(self.query):
            return
        self.query = self.query[: self.cursor] + self.query[self.cursor + 1 :]

    def move_cursor(self, delta: int) -> None:
        self.cursor = min(max(0, self.cursor + delta), len(self.query))

    def recall_history(self, step: int) -> None:
        """Replace the query with the previous (``-1``) or next (``+1``) history entry, cycling."""
        if not self.history:
            return
        if self.history_index is None:
            self.history_index = len(self.history) - 1 if step < 0 else 0
        else:
            self.history_index = (self.history_index + step) % len(self.history)
        self.query = ""
        self.cursor = 0
        for character in self.history[self.history_index]:
            self.insert_char(character)

    def submit(self) -> Action:
        if not self.query.strip() or self.cwd is None:
            return UpdateAppState(AppStatus.failure(EMPTY_QUERY))
        if self.query not in self.history:
            self.history.append(self.query)
        self.history_index = None
        request = StartSearch(
            root=self.cwd,
            query=self.query,
            max_depth=self.mode.max_depth,
            follow_symlinks=self.follow_symlinks,
            request_id=next_request_id(),
        )
        self.waiting_for = request.request_id
        return request

    def handle_key(self, key: str) -> Action | None:
        if not self.accepts_keys:
            return None
        if is_enter(key):
            return self.submit()
        if key == "ESC":
            self.reset()
            return SwitchAppContext(AppContext.EXPLORER)
        if key == "TAB":
            self.mode = self.mode.toggled()
        elif key == "UP":
            self.recall_history(-1)
        elif key == "DOWN":
            self.recall_history(1)
        elif key == "LEFT":
            self.move_cursor(-1)
        elif key == "RIGHT":
            self.move_cursor(1)
        elif key == "BACKSPACE":
            self.delete_left()
        elif key == "DELETE":
            self.delete_right()
        elif is_printable(key):
            self.insert_char(key)
        return None

    def update(self, action: Action) -> Action | None:
        if isinstance(action, SwitchAppContext):
            self.context = action.context
        elif isinstance(action, ShowSearchPage):
            self.cwd = action.cwd
            self.cwd_display_name = display_path(action.cwd)
        elif isinstance(action, SearchDone):
            if action.request_id != self.waiting_for:
                return None
            self.waiting_for = None
            if action.result is None:
                return UpdateAppState(AppStatus.failure(NO_MATCHES))
            self.reset()
            self.send_action(ShowResultsPage(action.result, self.mode))
            return SwitchAppContext(AppContext.RESULTS)
        elif isinstance(action, RequestSuperseded):
            if action.request_id == self.waiting_for:
                self.waiting_for = None
        elif isinstance(action, RequestFailed):
            if action.request_id == self.waiting_for:
                self.waiting_for = None
                return UpdateAppState(AppStatus.failure(action.message))
        return None

    def render(self, frame: Frame) -> None:
        if self.context is not AppContext.SEARCH:
            return
        frame.set_row(0, f"{HEADER_SGR} Search in {self.cwd_display_name}{RESET_SGR}")
        frame.set_row(2, f" Mode: {self.mode.value}{DIM_SGR}  (Tab to toggle){RESET_SGR}")
        before = self.query[: self.cursor]
        under = self.query[self.cursor : self.cursor + 1] or " "
        after = self.query[self.cursor + 1 :]
        frame.set_row(4, f" > {before}\033[7m{under}{RESET_SGR}{after}")
        if self.history:
            frame.set_row(6, f"{DIM_SGR} History: {len(self.history)} (Up/Down){RESET_SGR}")


__all__ = ["EMPTY_QUERY", "NO_MATCHES", "SearchComponent"]
