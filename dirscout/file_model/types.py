"""Domain datatypes for directory listings, search matches, and metadata."""

from __future__ import annotations

import os
import stat as stat_module
from dataclasses import dataclass
from pathlib import Path

PARENT_DIR_NAME = f"..{os.sep}"


@dataclass(frozen=True)
class FileMetadata:
    """Timestamps and size observed for one file."""

    created: float | None
    last_access: float | None
    modified: float | None
    size: int
    read_only: bool

    @classmethod
    def from_stat(cls, st: os.stat_result) -> FileMetadata:
        return cls(
            created=getattr(st, "st_birthtime", None),
            last_access=st.st_atime,
            modified=st.st_mtime,
            size=int(st.st_size),
            read_only=is_read_only(st.st_mode),
        )


@dataclass(frozen=True)
class DirMetadata:
    """Aggregated recursive counters for one directory."""

    dir_name: str
    created: float | None
    modified: float | None
    file_count: int = 0
    dir_count: int = 0
    total_size: int = 0


@dataclass(frozen=True)
class DiskEntry:
    """One listed or matched filesystem object.

    ``name`` is the display name: directories carry a trailing separator in
    explorer listings, and the synthetic parent row is ``PARENT_DIR_NAME``.
    """

    name: str
    path: Path
    is_dir: bool
    file_metadata: FileMetadata | None = None

    @property
    def is_parent_entry(self) -> bool:
        return self.name == PARENT_DIR_NAME


def is_read_only(mode: int) -> bool:
    """Return whether no write permission bit is set on ``mode``."""
    return not mode & (stat_module.S_IWUSR | stat_module.S_IWGRP | stat_module.S_IWOTH)


__all__ = [
    "PARENT_DIR_NAME",
    "FileMetadata",
    "DirMetadata",
    "DiskEntry",
    "is_read_only",
]
