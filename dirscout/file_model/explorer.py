"""Directory listing snapshots for the explorer view.

``load_directory`` is a pure function of the filesystem: every reload builds a
new ``Explorer`` and callers replace the old one wholesale.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from ..runtime.cancellation import CancellationToken
from .filtered import FilteredEntries
from .paths import absolute_path, display_path
from .types import PARENT_DIR_NAME, DiskEntry, FileMetadata
from .viewport import Viewport
from .walk import walk_entries


@dataclass
class Explorer:
    """One directory's entries plus the scroll state over them."""

    cwd: Path
    display_name: str
    entries: tuple[DiskEntry, ...]
    dir_count: int
    file_count: int
    viewport: Viewport = field(default_factory=Viewport)

    def __post_init__(self) -> None:
        self.viewport.length = len(self.entries)

    @property
    def selected(self) -> int:
        return self.viewport.selected

    def selected_entry(self) -> DiskEntry | None:
        if not self.entries:
            return None
        return self.entries[self.viewport.selected]

    def visible_entries(self) -> tuple[DiskEntry, ...]:
        return tuple(self.viewport.visible_slice(self.entries))

    def find_entries_with_initial(self, initial: str) -> FilteredEntries | None:
        """Index the entries whose name starts with ``initial``, ignoring case.

        The synthetic parent row never matches.
        """
        if not initial:
            return None
        wanted = initial[0].lower()
        indices = [
            index
            for index, entry in enumerate(self.entries)
            if not entry.is_parent_entry and entry.name[:1].lower() == wanted
        ]
        if not indices:
            return None
        return FilteredEntries(initial=initial[0], indices=indices)


def load_directory(
    path: Path,
    follow_symlinks: bool,
    token: CancellationToken | None = None,
) -> Explorer:
    """List the immediate children of ``path``.

    Directories come first, then files; each group is sorted by name
    (case-sensitive). A ``..`` row pointing at the parent is prepended when a
    parent exists. File metadata is captured eagerly, directories carry none.
    """
    cwd = absolute_path(path)
    dirs: list[DiskEntry] = []
    files: list[DiskEntry] = []
    for item in walk_entries(cwd, max_depth=1, follow_symlinks=follow_symlinks, token=token):
        if item.is_dir:
            dirs.append(DiskEntry(name=f"{item.name}{os.sep}", path=item.path, is_dir=True))
            continue
        metadata = FileMetadata.from_stat(item.stat) if item.stat is not None else None
        files.append(DiskEntry(name=item.name, path=item.path, is_dir=False, file_metadata=metadata))

    dirs.sort(key=lambda entry: entry.name)
    files.sort(key=lambda entry: entry.name)

    entries: list[DiskEntry] = []
    if cwd.parent != cwd:
        entries.append(DiskEntry(name=PARENT_DIR_NAME, path=cwd.parent, is_dir=True))
    entries.extend(dirs)
    entries.extend(files)

    return Explorer(
        cwd=cwd,
        display_name=display_path(cwd),
        entries=tuple(entries),
        dir_count=len(dirs),
        file_count=len(files),
    )


__all__ = ["Explorer", "load_directory"]
