"""Popup showing file or directory metadata over the active list."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from ..actions import Action, CloseMetadata, ShowDirMetadata, ShowFileMetadata
from ..file_model.export import guess_format
from ..file_model.paths import format_size
from ..file_model.types import DirMetadata, FileMetadata
from ..render import Frame
from .base import Component

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(value: float | None) -> str:
    if value is None:
        return "-"
    return datetime.fromtimestamp(value).strftime(TIME_FORMAT)


def file_metadata_lines(path: Path, metadata: FileMetadata) -> list[str]:
    return [
        f"Created:   {format_timestamp(metadata.created)}",
        f"Last used: {format_timestamp(metadata.last_access)}",
        f"Modified:  {format_timestamp(metadata.modified)}",
        f"Read-only: {'yes' if metadata.read_only else 'no'}",
        f"Size:      {format_size(metadata.size)}",
        f"Type:      {guess_format(path)}",
    ]


def dir_metadata_lines(metadata: DirMetadata) -> list[str]:
    return [
        f"Created:        {format_timestamp(metadata.created)}",
        f"Modified:       {format_timestamp(metadata.modified)}",
        f"Included dirs:  {metadata.dir_count}",
        f"Included files: {metadata.file_count}",
        f"Total size:     {format_size(metadata.total_size)}",
    ]


class MetadataPopup(Component):
    """Owns the keyboard while open; Esc closes it."""

    def __init__(self) -> None:
        self.title: str | None = None
        self.lines: list[str] = []

    @property
    def is_open(self) -> bool:
        return self.title is not None

    def handle_key(self, key: str) -> Action | None:
        if self.is_open and key == "ESC":
            return CloseMetadata()
        return None

    def update(self, action: Action) -> Action | None:
        if isinstance(action, ShowFileMetadata):
            self.title = action.path.name
            self.lines = file_metadata_lines(action.path, action.metadata)
        elif isinstance(action, ShowDirMetadata):
            self.title = action.metadata.dir_name
            self.lines = dir_metadata_lines(action.metadata)
        elif isinstance(action, CloseMetadata):
            self.title = None
            self.lines = []
        return None

    def render(self, frame: Frame) -> None:
        if self.title is None:
            return
        frame.overlay_box(f"{self.title} | <Esc> close", self.lines)


__all__ = ["MetadataPopup", "dir_metadata_lines", "file_metadata_lines", "format_timestamp"]
