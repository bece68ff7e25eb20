"""Directory explorer view."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from ..actions import (
    Action,
    AppContext,
    AppStatus,
    CloseMetadata,
    Init,
    LoadDir,
    LoadDirDone,
    LoadDirMetadata,
    LoadDirMetadataDone,
    RequestFailed,
    RequestSuperseded,
    Resize,
    ShowDirMetadata,
    ShowFileMetadata,
    ShowSearchPage,
    SwitchAppContext,
    UpdateAppState,
    next_request_id,
)
from ..file_model.explorer import Explorer
from ..file_model.filtered import FilteredEntries
from ..file_model.paths import absolute_path, user_home_dir
from ..render import DIM_SGR, HEADER_SGR, RESET_SGR, Frame, selected_with_ansi
from .base import Component, is_enter, is_printable, list_height_for
from .listing import NO_METADATA, metadata_request, page_down, page_up

SELECTED_DIR_GONE = "The selected directory no longer exists"
CURRENT_DIR_GONE = "The current directory no longer exists"
NO_PARENT_DIR = "No parent directory available"
ALREADY_HOME = "Already in home directory"
NO_HOME_DIR = "Unable to determine home dir"
NO_MATCHES = "No matches found"


class ExplorerComponent(Component):
    """Browses one directory at a time; every reload goes through the worker."""

    def __init__(
        self,
        start_dir: Path,
        follow_symlinks: bool,
        home_dir: Callable[[], Path | None] = user_home_dir,
    ) -> None:
        self.start_dir = absolute_path(start_dir)
        self.follow_symlinks = follow_symlinks
        self._home_dir = home_dir
        self.explorer: Explorer | None = None
        self.filtered = FilteredEntries()
        self.context = AppContext.EXPLORER
        self.waiting_for: int | None = None
        self.metadata_open = False
        self.list_height = 0

    @property
    def accepts_keys(self) -> bool:
        return (
            self.context is AppContext.EXPLORER
            and self.explorer is not None
            and self.waiting_for is None
            and not self.metadata_open
        )

    def init_size(self, width: int, height: int) -> None:
        self.list_height = list_height_for(height)

    def _load(self, path: Path) -> LoadDir:
        request = LoadDir(path=path, follow_symlinks=self.follow_symlinks, request_id=next_request_id())
        self.waiting_for = request.request_id
        return request

    def _track(self, action: Action | None) -> Action | None:
        if isinstance(action, LoadDirMetadata):
            self.waiting_for = action.request_id
        elif isinstance(action, ShowFileMetadata):
            self.metadata_open = True
        return action

    def handle_key(self, key: str) -> Action | None:
        if not self.accepts_keys:
            return None
        assert self.explorer is not None
        explorer = self.explorer
        viewport = explorer.viewport

        if key == "UP":
            viewport.scroll_up()
            return None
        if key == "DOWN":
            viewport.scroll_down()
            return None
        if key == "PAGE_UP":
            return page_up(viewport, self.list_height)
        if key == "PAGE_DOWN":
            return page_down(viewport, self.list_height)
        if key in {"F5", "CTRL_R"}:
            if not explorer.cwd.is_dir():
                return UpdateAppState(AppStatus.failure(CURRENT_DIR_GONE))
            return self._load(explorer.cwd)
        if is_enter(key):
            entry = explorer.selected_entry()
            if entry is None or entry.path.is_file():
                return None
            if entry.path.is_dir():
                return self._load(entry.path)
            return UpdateAppState(AppStatus.failure(SELECTED_DIR_GONE))
        if key == "BACKSPACE":
            parent = explorer.cwd.parent
            if parent == explorer.cwd:
                return UpdateAppState(AppStatus.failure(NO_PARENT_DIR))
            return self._load(parent)
        if key == "CTRL_F":
            if not explorer.cwd.is_dir():
                return UpdateAppState(AppStatus.failure(CURRENT_DIR_GONE))
            self.send_action(SwitchAppContext(AppContext.SEARCH))
            return ShowSearchPage(explorer.cwd)
        if key == "CTRL_U":
            home = self._home_dir()
            if home is None:
                return UpdateAppState(AppStatus.failure(NO_HOME_DIR))
            if absolute_path(home) == explorer.cwd:
                return UpdateAppState(AppStatus.done(ALREADY_HOME))
            return self._load(absolute_path(home))
        if key == "CTRL_A":
            entry = explorer.selected_entry()
            if entry is None:
                return None
            return self._track(metadata_request(entry, self.follow_symlinks))
        if is_printable(key):
            return UpdateAppState(self._jump_to_initial(key))
        return None

    def _jump_to_initial(self, character: str) -> AppStatus:
        assert self.explorer is not None
        explorer = self.explorer
        if not self.filtered.matches_letter(character):
            found = explorer.find_entries_with_initial(character)
            if found is None:
                return AppStatus.failure(NO_MATCHES)
            self.filtered = found
        index = self.filtered.find_next(explorer.selected)
        if index is not None:
            explorer.viewport.go_to_index(index)
        return AppStatus.done(f"Match {self.filtered.hint_pos}/{self.filtered.total}")

    def update(self, action: Action) -> Action | None:
        if isinstance(action, Init):
            if self.explorer is None and self.waiting_for is None:
                return self._load(self.start_dir)
        elif isinstance(action, SwitchAppContext):
            self.context = action.context
        elif isinstance(action, LoadDirDone):
            if action.request_id != self.waiting_for:
                return None
            self.waiting_for = None
            self.explorer = action.explorer
            self.explorer.viewport.set_window_height(self.list_height)
            self.explorer.viewport.reset()
            self.filtered.reset()
            return UpdateAppState(AppStatus.done("Done"))
        elif isinstance(action, LoadDirMetadataDone):
            if action.request_id != self.waiting_for:
                return None
            self.waiting_for = None
            if action.metadata is None:
                return UpdateAppState(AppStatus.failure(NO_METADATA))
            self.metadata_open = True
            return ShowDirMetadata(action.metadata)
        elif isinstance(action, RequestSuperseded):
            if action.request_id == self.waiting_for:
                self.waiting_for = None
        elif isinstance(action, RequestFailed):
            if action.request_id == self.waiting_for:
                self.waiting_for = None
                return UpdateAppState(AppStatus.failure(action.message))
        elif isinstance(action, CloseMetadata):
            self.metadata_open = False
        elif isinstance(action, Resize):
            self.filtered.reset()
            self.list_height = list_height_for(action.height)
            if self.explorer is not None:
                self.explorer.viewport.set_window_height(self.list_height)
                self.explorer.viewport.reset()
            if self.context is AppContext.EXPLORER:
                return UpdateAppState(AppStatus.done(""))
        return None

    def render(self, frame: Frame) -> None:
        if self.context is not AppContext.EXPLORER:
            return
        explorer = self.explorer
        if explorer is None:
            frame.set_row(0, f"{HEADER_SGR} Loading {self.start_dir}{RESET_SGR}")
            return
        frame.set_row(
            0,
            f"{HEADER_SGR} {explorer.display_name}{RESET_SGR}"
            f"{DIM_SGR}  {explorer.dir_count} Dirs, {explorer.file_count} Files{RESET_SGR}",
        )
        window = explorer.viewport.visible_range()
        for row, index in enumerate(window, start=1):
            entry = explorer.entries[index]
            if index == explorer.selected:
                frame.set_row(row, selected_with_ansi(f"> {entry.name}".ljust(frame.width)))
            else:
                frame.set_row(row, f"  {entry.name}")


__all__ = [
    "ALREADY_HOME",
    "CURRENT_DIR_GONE",
    "ExplorerComponent",
    "NO_HOME_DIR",
    "NO_MATCHES",
    "NO_PARENT_DIR",
    "SELECTED_DIR_GONE",
]
