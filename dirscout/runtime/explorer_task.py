"""Background worker that runs one filesystem operation at a time.

Submitting a request always supersedes the in-flight one: its cancellation
token is signalled and the newer request replaces any pending one. Results
and progress go out as Actions on the loop's channel.

Sends happen under the supervisor lock after a token check, so once
``submit`` returns, no Action of a superseded run can still reach the
channel.
"""

from __future__ import annotations

import enum
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import assert_never

from ..actions import (
    Action,
    AppStatus,
    ExplorerRequest,
    LoadDir,
    LoadDirDone,
    LoadDirMetadata,
    LoadDirMetadataDone,
    RequestFailed,
    RequestSuperseded,
    SearchDone,
    StartSearch,
    UpdateAppState,
)
from ..file_model.explorer import load_directory
from ..file_model.search import get_recursive_metadata, search
from .cancellation import CancellationToken, OperationAborted, OperationCancelled
from .channel import ActionSender, ChannelClosed
from .shutdown import ShutdownTiming, wait_for_thread

logger = logging.getLogger(__name__)

LOADING_DIRECTORY = "Loading directory..."


def metadata_progress_message(files: int, dirs: int) -> str:
    return f"Calculate metadata... {files} Files, {dirs} Dirs"


def search_progress_message(files: int, dirs: int) -> str:
    return f"Search in progress... {files} Files, {dirs} Dirs"


class TaskState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    CANCELLING = "cancelling"
    FORCED_SHUTDOWN = "forced_shutdown"


@dataclass(frozen=True)
class ExplorerOperations:
    """Filesystem operations the worker dispatches to; replaced in tests."""

    load_directory: Callable[..., object] = load_directory
    get_recursive_metadata: Callable[..., object] = get_recursive_metadata
    search: Callable[..., object] = search


@dataclass
class _Run:
    request: ExplorerRequest
    token: CancellationToken = field(default_factory=CancellationToken)


class ExplorerTask:
    """Single-worker, latest-request-wins supervisor."""

    def __init__(
        self,
        action_sender: ActionSender[Action],
        operations: ExplorerOperations | None = None,
        timing: ShutdownTiming | None = None,
    ) -> None:
        self._sender = action_sender
        self._operations = operations or ExplorerOperations()
        self._timing = timing or ShutdownTiming()
        self._lock = threading.Lock()
        self._pending: ExplorerRequest | None = None
        self._active: _Run | None = None
        self._thread: threading.Thread | None = None
        self._running = False
        self._stopped = False
        self._aborted = False
        self._forced_shutdown = False
        self._state = TaskState.IDLE

    @property
    def state(self) -> TaskState:
        with self._lock:
            return self._state

    @property
    def is_forced_shutdown(self) -> bool:
        with self._lock:
            return self._forced_shutdown

    def submit(self, request: ExplorerRequest) -> None:
        """Cancel whatever is in flight and run ``request`` next."""
        with self._lock:
            if self._stopped:
                logger.debug("ignoring request %d after stop", request.request_id)
                return

            superseded: list[int] = []
            active = self._active
            if active is not None and not active.token.is_cancelled:
                active.token.cancel()
                superseded.append(active.request.request_id)
            if self._pending is not None:
                superseded.append(self._pending.request_id)
            self._pending = request

            for request_id in superseded:
                logger.debug("request %d superseded by %d", request_id, request.request_id)
                self._send_locked(RequestSuperseded(request_id))

            if self._running:
                return
            self._running = True
            self._state = TaskState.RUNNING
            worker = threading.Thread(
                target=self._worker,
                name="dirscout-explorer-task",
                daemon=True,
            )
            self._thread = worker
        worker.start()

    def stop(self) -> bool:
        """Cancel the active run and wait for the worker within bounded time.

        Returns ``True`` on a clean stop. When the worker outlives the hard
        ceiling the supervisor flags a forced shutdown and returns ``False``;
        the daemon thread is then left behind.
        """
        with self._lock:
            self._stopped = True
            self._pending = None
            if self._active is not None:
                self._active.token.cancel()
            thread = self._thread
            if thread is None or not thread.is_alive():
                self._state = TaskState.IDLE
                return True
            self._state = TaskState.CANCELLING

        finished = wait_for_thread(thread, self._timing, on_abort=self._abort)

        with self._lock:
            if finished:
                self._state = TaskState.IDLE
            else:
                self._forced_shutdown = True
                self._state = TaskState.FORCED_SHUTDOWN
        if not finished:
            logger.error(
                "explorer task did not finish within %.3fs; forcing shutdown",
                self._timing.give_up_after,
            )
        return finished

    def _abort(self) -> None:
        with self._lock:
            self._aborted = True
        logger.warning(
            "explorer task still running after %.3fs; aborting",
            self._timing.abort_after,
        )

    def _send_locked(self, action: Action) -> None:
        try:
            self._sender.send(action)
        except ChannelClosed:
            logger.error("failed to send %s: action channel closed", type(action).__name__)

    def _emit(self, run: _Run, action: Action) -> None:
        with self._lock:
            if self._aborted:
                raise OperationAborted()
            run.token.raise_if_cancelled()
            self._sender.send(action)

    def _worker(self) -> None:
        while True:
            with self._lock:
                request = None if self._stopped else self._pending
                self._pending = None
                if request is None:
                    self._running = False
                    self._active = None
                    if self._state is TaskState.RUNNING:
                        self._state = TaskState.IDLE
                    return
                run = _Run(request)
                self._active = run

            try:
                self._execute(run)
            except OperationAborted:
                logger.warning("request %d aborted", request.request_id)
            except OperationCancelled:
                logger.debug("request %d cancelled", request.request_id)
            except ChannelClosed:
                logger.error("request %d finished after the action channel closed", request.request_id)
            except Exception as exc:
                logger.exception("request %d failed", request.request_id)
                try:
                    self._emit(run, RequestFailed(request.request_id, str(exc) or type(exc).__name__))
                except (OperationCancelled, ChannelClosed):
                    logger.debug("failure of request %d not reported", request.request_id)

            with self._lock:
                if self._active is run:
                    self._active = None

    def _execute(self, run: _Run) -> None:
        request = run.request
        operations = self._operations
        if isinstance(request, LoadDir):
            self._emit(run, UpdateAppState(AppStatus.working(LOADING_DIRECTORY)))
            explorer = operations.load_directory(
                request.path,
                request.follow_symlinks,
                run.token,
            )
            self._emit(run, LoadDirDone(explorer, request.request_id))
        elif isinstance(request, LoadDirMetadata):
            metadata = operations.get_recursive_metadata(
                request.name,
                request.path,
                request.follow_symlinks,
                self._progress(run, metadata_progress_message),
                run.token,
            )
            self._emit(run, LoadDirMetadataDone(metadata, request.request_id))
        elif isinstance(request, StartSearch):
            result = operations.search(
                request.root,
                request.query,
                request.max_depth,
                request.follow_symlinks,
                self._progress(run, search_progress_message),
                run.token,
            )
            self._emit(run, SearchDone(result, request.request_id))
        else:
            assert_never(request)

    def _progress(self, run: _Run, format_message: Callable[[int, int], str]) -> Callable[[int, int], None]:
        def report(files: int, dirs: int) -> None:
            self._emit(run, UpdateAppState(AppStatus.working(format_message(files, dirs))))

        return report


__all__ = [
    "ExplorerOperations",
    "ExplorerTask",
    "LOADING_DIRECTORY",
    "TaskState",
    "metadata_progress_message",
    "search_progress_message",
]
