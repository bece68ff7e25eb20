"""Depth-bounded, cancellable directory traversal.

Yields entries in depth-first pre-order below (never including) the root.
Unreadable directories and entries are skipped rather than reported.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from ..runtime.cancellation import CancellationToken


@dataclass(frozen=True)
class WalkEntry:
    """One visited filesystem object and its cached stat result."""

    name: str
    path: Path
    depth: int
    is_dir: bool
    stat: os.stat_result | None


def _list_children(
    directory: Path,
    sort_by_name: bool,
    token: CancellationToken | None,
) -> list[os.DirEntry[str]]:
    # Only names are read here; stat calls wait until each entry is visited.
    children: list[os.DirEntry[str]] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                if token is not None:
                    token.raise_if_cancelled()
                children.append(child)
    except OSError:
        return []
    if sort_by_name:
        children.sort(key=lambda child: child.name)
    return children


def _visit(child: os.DirEntry[str], depth: int, follow_symlinks: bool) -> WalkEntry | None:
    try:
        is_dir = child.is_dir(follow_symlinks=follow_symlinks)
    except OSError:
        return None
    try:
        child_stat: os.stat_result | None = child.stat(follow_symlinks=follow_symlinks)
    except OSError:
        if follow_symlinks and child.is_symlink():
            # Dangling link: keep it like any other file entry.
            child_stat = None
        else:
            return None
    return WalkEntry(
        name=child.name,
        path=Path(child.path),
        depth=depth,
        is_dir=is_dir,
        stat=child_stat,
    )


def _identity(entry: WalkEntry) -> tuple[int, int] | None:
    if entry.stat is None:
        return None
    return (entry.stat.st_dev, entry.stat.st_ino)


def walk_entries(
    root: Path,
    *,
    max_depth: int | None = None,
    follow_symlinks: bool = False,
    sort_by_name: bool = False,
    token: CancellationToken | None = None,
) -> Iterator[WalkEntry]:
    """Walk ``root`` down to ``max_depth`` levels (``None`` means unbounded).

    ``token`` is checked for every directory entry read and again before
    every visited entry. When following symlinks, directories already on the
    current path are not descended into again.
    """
    if max_depth is not None and max_depth < 1:
        return

    ancestors: list[tuple[int, int] | None] = []
    if follow_symlinks:
        try:
            root_stat = root.stat()
            ancestors.append((root_stat.st_dev, root_stat.st_ino))
        except OSError:
            ancestors.append(None)

    stack: list[tuple[Iterator[os.DirEntry[str]], int]] = [
        (iter(_list_children(root, sort_by_name, token)), 1)
    ]
    while stack:
        if token is not None:
            token.raise_if_cancelled()
        children, depth = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            if follow_symlinks and ancestors:
                ancestors.pop()
            continue

        entry = _visit(child, depth, follow_symlinks)
        if entry is None:
            continue
        yield entry

        if not entry.is_dir:
            continue
        if max_depth is not None and entry.depth >= max_depth:
            continue
        if follow_symlinks:
            identity = _identity(entry)
            if identity is not None and identity in ancestors:
                continue
            ancestors.append(identity)
        stack.append((iter(_list_children(entry.path, sort_by_name, token)), depth + 1))


__all__ = ["WalkEntry", "walk_entries"]
