"""Recursive name search and directory metadata aggregation.

Both walks report running file/directory counters through a progress sink
after every visited entry; that callback is the only feedback during long
traversals.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..runtime.cancellation import CancellationToken
from .paths import absolute_path, display_path
from .types import DirMetadata, DiskEntry, FileMetadata
from .viewport import Viewport
from .walk import walk_entries

ProgressSink = Callable[[int, int], None]


class SearchMode(enum.Enum):
    FLAT = "Flat"
    DEEP = "Deep"

    @property
    def max_depth(self) -> int | None:
        return 1 if self is SearchMode.FLAT else None

    def toggled(self) -> SearchMode:
        return SearchMode.DEEP if self is SearchMode.FLAT else SearchMode.FLAT


@dataclass
class SearchResult:
    """Matches of one query below one directory, in walk order."""

    root: Path
    display_name: str
    query: str
    entries: tuple[DiskEntry, ...]
    viewport: Viewport = field(default_factory=Viewport)

    def __post_init__(self) -> None:
        self.viewport.length = len(self.entries)

    def selected_entry(self) -> DiskEntry | None:
        if not self.entries:
            return None
        return self.entries[self.viewport.selected]

    def visible_entries(self) -> tuple[DiskEntry, ...]:
        return tuple(self.viewport.visible_slice(self.entries))


def _ignore_progress(_files: int, _dirs: int) -> None:
    return None


def search(
    root: Path,
    query: str,
    max_depth: int | None,
    follow_symlinks: bool,
    progress: ProgressSink | None = None,
    token: CancellationToken | None = None,
) -> SearchResult | None:
    """Find entries below ``root`` whose base name contains ``query``, ignoring case.

    Returns ``None`` when nothing matched.
    """
    sink = progress or _ignore_progress
    root = absolute_path(root)
    needle = query.lower()
    matches: list[DiskEntry] = []
    file_count = 0
    dir_count = 0

    for item in walk_entries(
        root,
        max_depth=max_depth,
        follow_symlinks=follow_symlinks,
        sort_by_name=True,
        token=token,
    ):
        if item.is_dir:
            dir_count += 1
        else:
            file_count += 1

        if needle in item.name.lower():
            metadata = None
            if not item.is_dir and item.stat is not None:
                metadata = FileMetadata.from_stat(item.stat)
            matches.append(DiskEntry(name=item.name, path=item.path, is_dir=item.is_dir, file_metadata=metadata))

        sink(file_count, dir_count)

    if not matches:
        return None
    return SearchResult(
        root=root,
        display_name=display_path(root),
        query=query,
        entries=tuple(matches),
    )


def get_recursive_metadata(
    dir_name: str,
    path: Path,
    follow_symlinks: bool,
    progress: ProgressSink | None = None,
    token: CancellationToken | None = None,
) -> DirMetadata | None:
    """Count entries below ``path`` and sum their file sizes.

    Returns ``None`` when ``path`` itself cannot be stat'ed.
    """
    sink = progress or _ignore_progress
    try:
        st = path.stat() if follow_symlinks else path.lstat()
    except OSError:
        return None

    file_count = 0
    dir_count = 0
    total_size = 0
    for item in walk_entries(path, follow_symlinks=follow_symlinks, token=token):
        if item.is_dir:
            dir_count += 1
        else:
            file_count += 1
            if item.stat is not None:
                total_size += int(item.stat.st_size)
        sink(file_count, dir_count)

    return DirMetadata(
        dir_name=dir_name,
        created=getattr(st, "st_birthtime", None),
        modified=st.st_mtime,
        file_count=file_count,
        dir_count=dir_count,
        total_size=total_size,
    )


__all__ = [
    "ProgressSink",
    "SearchMode",
    "SearchResult",
    "get_recursive_metadata",
    "search",
]
