"""Action messages exchanged between the dispatch loop and its producers.

Every Action is an immutable value. Intents (``LoadDir``, ``StartSearch``, ...)
and facts (``LoadDirDone``, ``SearchDone``, ...) share the same channel; the
``Action`` alias is the closed union consumers match on.
"""

from __future__ import annotations

import enum
import itertools
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .file_model.explorer import Explorer
from .file_model.search import SearchMode, SearchResult
from .file_model.types import DirMetadata, FileMetadata

_request_ids = itertools.count(1)
_request_ids_lock = threading.Lock()


def next_request_id() -> int:
    """Return a process-unique id used to match worker results to their request."""
    with _request_ids_lock:
        return next(_request_ids)


class StatusKind(enum.Enum):
    DONE = "done"
    FAILURE = "failure"
    WORKING = "working"


@dataclass(frozen=True)
class AppStatus:
    kind: StatusKind
    message: str

    @classmethod
    def done(cls, message: str) -> AppStatus:
        return cls(StatusKind.DONE, message)

    @classmethod
    def failure(cls, message: str) -> AppStatus:
        return cls(StatusKind.FAILURE, message)

    @classmethod
    def working(cls, message: str) -> AppStatus:
        return cls(StatusKind.WORKING, message)


class AppContext(enum.Enum):
    EXPLORER = "explorer"
    SEARCH = "search"
    RESULTS = "results"
    NOT_ACTIVE = "not_active"


# Loop lifecycle.


@dataclass(frozen=True)
class Init:
    pass


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Render:
    pass


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class Resume:
    pass


@dataclass(frozen=True)
class Suspend:
    pass


@dataclass(frozen=True)
class NoOp:
    pass


@dataclass(frozen=True)
class Error:
    message: str


@dataclass(frozen=True)
class ForcedShutdown:
    pass


# Status and focus.


@dataclass(frozen=True)
class UpdateAppState:
    status: AppStatus


@dataclass(frozen=True)
class SwitchAppContext:
    context: AppContext


# Background requests and their results.


@dataclass(frozen=True)
class LoadDir:
    path: Path
    follow_symlinks: bool
    request_id: int


@dataclass(frozen=True)
class LoadDirDone:
    explorer: Explorer
    request_id: int


@dataclass(frozen=True)
class LoadDirMetadata:
    name: str
    path: Path
    follow_symlinks: bool
    request_id: int


@dataclass(frozen=True)
class LoadDirMetadataDone:
    metadata: DirMetadata | None
    request_id: int


@dataclass(frozen=True)
class StartSearch:
    root: Path
    query: str
    max_depth: int | None
    follow_symlinks: bool
    request_id: int


@dataclass(frozen=True)
class SearchDone:
    result: SearchResult | None
    request_id: int


@dataclass(frozen=True)
class RequestSuperseded:
    request_id: int


@dataclass(frozen=True)
class RequestFailed:
    request_id: int
    message: str


# Pages and popups.


@dataclass(frozen=True)
class ShowSearchPage:
    cwd: Path


@dataclass(frozen=True)
class ShowResultsPage:
    result: SearchResult
    mode: SearchMode


@dataclass(frozen=True)
class ShowFileMetadata:
    path: Path
    metadata: FileMetadata


@dataclass(frozen=True)
class ShowDirMetadata:
    metadata: DirMetadata


@dataclass(frozen=True)
class CloseMetadata:
    pass


# Export.


@dataclass(frozen=True)
class ExportDone:
    path: Path


@dataclass(frozen=True)
class ExportFailure:
    message: str


ExplorerRequest = Union[LoadDir, LoadDirMetadata, StartSearch]

Action = Union[
    Init,
    Quit,
    Render,
    Resize,
    Tick,
    Resume,
    Suspend,
    NoOp,
    Error,
    ForcedShutdown,
    UpdateAppState,
    SwitchAppContext,
    LoadDir,
    LoadDirDone,
    LoadDirMetadata,
    LoadDirMetadataDone,
    StartSearch,
    SearchDone,
    RequestSuperseded,
    RequestFailed,
    ShowSearchPage,
    ShowResultsPage,
    ShowFileMetadata,
    ShowDirMetadata,
    CloseMetadata,
    ExportDone,
    ExportFailure,
]

__all__ = [
    "Action",
    "AppContext",
    "AppStatus",
    "CloseMetadata",
    "Error",
    "ExplorerRequest",
    "ExportDone",
    "ExportFailure",
    "ForcedShutdown",
    "Init",
    "LoadDir",
    "LoadDirDone",
    "LoadDirMetadata",
    "LoadDirMetadataDone",
    "NoOp",
    "Quit",
    "Render",
    "RequestFailed",
    "RequestSuperseded",
    "Resize",
    "Resume",
    "SearchDone",
    "ShowDirMetadata",
    "ShowFileMetadata",
    "ShowResultsPage",
    "ShowSearchPage",
    "StartSearch",
    "StatusKind",
    "SwitchAppContext",
    "Suspend",
    "Tick",
    "UpdateAppState",
    "next_request_id",
]
