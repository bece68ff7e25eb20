"""Search results view with metadata lookup and JSON export."""

from __future__ import annotations

from pathlib import Path

from ..actions import (
    Action,
    AppContext,
    AppStatus,
    CloseMetadata,
    ExportDone,
    ExportFailure,
    LoadDirMetadata,
    LoadDirMetadataDone,
    RequestFailed,
    RequestSuperseded,
    Resize,
    ShowDirMetadata,
    ShowFileMetadata,
    ShowResultsPage,
    SwitchAppContext,
    UpdateAppState,
)
from ..file_model.search import SearchMode, SearchResult
from ..render import DIM_SGR, HEADER_SGR, RESET_SGR, Frame, selected_with_ansi
from ..runtime.export_task import ExportTask
from .base import Component, list_height_for
from .listing import NO_METADATA, metadata_request, page_down, page_up

EXPORTING = "Exporting results..."
EXPORT_COMPLETED = "Export completed"
EXPORT_BUSY = "An export is already running"


class ResultsComponent(Component):
    def __init__(self, follow_symlinks: bool, export_dir: Path, export_task: ExportTask) -> None:
        self.follow_symlinks = follow_symlinks
        self.export_dir = export_dir
        self.export_task = export_task
        self.context = AppContext.EXPLORER
        self.result: SearchResult | None = None
        self.mode = SearchMode.FLAT
        self.waiting_for: int | None = None
        self.exporting = False
        self.metadata_open = False
        self.list_height = 0

    @property
    def accepts_keys(self) -> bool:
        return (
            self.context is AppContext.RESULTS
            and self.result is not None
            and self.waiting_for is None
            and not self.exporting
            and not self.metadata_open
        )

    def init_size(self, width: int, height: int) -> None:
        self.list_height = list_height_for(height)

    def selected_hint(self) -> str:
        if self.result is None or not self.result.entries:
            return "0/0"
        return f"{self.result.viewport.selected + 1}/{len(self.result.entries)}"

    def handle_key(self, key: str) -> Action | None:
        if not self.accepts_keys:
            return None
        assert self.result is not None
        viewport = self.result.viewport

        if key == "UP":
            viewport.scroll_up()
        elif key == "DOWN":
            viewport.scroll_down()
        elif key == "PAGE_UP":
            return page_up(viewport, self.list_height)
        elif key == "PAGE_DOWN":
            return page_down(viewport, self.list_height)
        elif key == "CTRL_A":
            entry = self.result.selected_entry()
            if entry is None:
                return None
            action = metadata_request(entry, self.follow_symlinks)
            if isinstance(action, LoadDirMetadata):
                self.waiting_for = action.request_id
            elif isinstance(action, ShowFileMetadata):
                self.metadata_open = True
            return action
        elif key == "CTRL_E":
            return self.start_export()
        elif key == "ESC":
            self.result = None
            return SwitchAppContext(AppContext.SEARCH)
        return None

    def start_export(self) -> Action:
        assert self.result is not None
        if not self.export_task.start(self.result, self.export_dir):
            return UpdateAppState(AppStatus.failure(EXPORT_BUSY))
        self.exporting = True
        return UpdateAppState(AppStatus.working(EXPORTING))

    def update(self, action: Action) -> Action | None:
        if isinstance(action, SwitchAppContext):
            self.context = action.context
        elif isinstance(action, ShowResultsPage):
            self.mode = action.mode
            self.result = action.result
            self.result.viewport.set_window_height(self.list_height)
            self.result.viewport.reset()
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
        elif isinstance(action, ExportDone):
            self.exporting = False
            return UpdateAppState(AppStatus.done(EXPORT_COMPLETED))
        elif isinstance(action, ExportFailure):
            self.exporting = False
            return UpdateAppState(AppStatus.failure(action.message))
        elif isinstance(action, CloseMetadata):
            self.metadata_open = False
        elif isinstance(action, Resize):
            self.list_height = list_height_for(action.height)
            if self.result is not None:
                self.result.viewport.set_window_height(self.list_height)
                self.result.viewport.reset()
            if self.context is AppContext.RESULTS:
                return UpdateAppState(AppStatus.done(""))
        return None

    def render(self, frame: Frame) -> None:
        if self.context is not AppContext.RESULTS or self.result is None:
            return
        result = self.result
        frame.set_row(
            0,
            f"{HEADER_SGR} Results for '{result.query}' in {result.display_name}{RESET_SGR}"
            f"{DIM_SGR}  {self.mode.value}  {self.selected_hint()}{RESET_SGR}",
        )
        for row, index in enumerate(result.viewport.visible_range(), start=1):
            entry = result.entries[index]
            kind = "D" if entry.is_dir else "F"
            text = f"{kind} {entry.path}"
            if index == result.viewport.selected:
                frame.set_row(row, selected_with_ansi(f"> {text}".ljust(frame.width)))
            else:
                frame.set_row(row, f"  {text}")


__all__ = ["EXPORTING", "EXPORT_BUSY", "EXPORT_COMPLETED", "ResultsComponent"]
