"""Key behaviour shared by the explorer and results lists."""

from __future__ import annotations

from ..actions import (
    Action,
    AppStatus,
    LoadDirMetadata,
    ShowFileMetadata,
    UpdateAppState,
    next_request_id,
)
from ..file_model.types import DiskEntry
from ..file_model.viewport import Viewport

FIRST_ITEM_REACHED = "First item reached"
LAST_ITEM_REACHED = "Last item reached"
NO_METADATA = "No metadata available"
OBJECT_GONE = "The selected object no longer exists"


def page_up(viewport: Viewport, height: int) -> Action:
    if viewport.at_first():
        return UpdateAppState(AppStatus.done(FIRST_ITEM_REACHED))
    viewport.page_up_by(height)
    return UpdateAppState(AppStatus.done(""))


def page_down(viewport: Viewport, height: int) -> Action:
    if viewport.at_last():
        return UpdateAppState(AppStatus.done(LAST_ITEM_REACHED))
    viewport.page_down_by(height)
    return UpdateAppState(AppStatus.done(""))


def metadata_request(entry: DiskEntry, follow_symlinks: bool) -> Action | None:
    """Return the Action that shows metadata for ``entry``.

    Files resolve immediately from the cached stat; directories need a
    background ``LoadDirMetadata``. ``None`` is returned for the parent row.
    """
    if entry.is_parent_entry:
        return None
    if not entry.path.exists():
        return UpdateAppState(AppStatus.failure(OBJECT_GONE))
    if entry.path.is_file():
        if entry.file_metadata is None:
            return UpdateAppState(AppStatus.failure(NO_METADATA))
        return ShowFileMetadata(entry.path, entry.file_metadata)
    if entry.path.is_dir():
        return LoadDirMetadata(
            name=entry.name,
            path=entry.path,
            follow_symlinks=follow_symlinks,
            request_id=next_request_id(),
        )
    return UpdateAppState(AppStatus.failure(NO_METADATA))


__all__ = [
    "FIRST_ITEM_REACHED",
    "LAST_ITEM_REACHED",
    "NO_METADATA",
    "OBJECT_GONE",
    "metadata_request",
    "page_down",
    "page_up",
]
