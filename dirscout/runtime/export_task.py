"""Background writer for search-result exports."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from ..actions import Action, ExportDone, ExportFailure
from ..file_model.export import export_search_result
from ..file_model.search import SearchResult
from .channel import ActionSender, ChannelClosed
from .shutdown import ShutdownTiming, wait_for_thread

logger = logging.getLogger(__name__)

EXPORT_WRITE_FAILED = "Failed to write to export file"


class ExportTask:
    """Runs at most one export thread and reports its outcome as an Action."""

    def __init__(
        self,
        action_sender: ActionSender[Action],
        export: Callable[[SearchResult, Path], Path] = export_search_result,
        timing: ShutdownTiming | None = None,
    ) -> None:
        self._sender = action_sender
        self._export = export
        self._timing = timing or ShutdownTiming()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, result: SearchResult, export_dir: Path) -> bool:
        """Start exporting ``result``; return ``False`` if an export is still running."""
        if self.is_running:
            return False
        worker = threading.Thread(
            target=self._run,
            args=(result, export_dir),
            name="dirscout-export",
            daemon=True,
        )
        self._thread = worker
        worker.start()
        return True

    def stop(self) -> bool:
        """Wait for a running export within the shutdown ceiling."""
        thread = self._thread
        if thread is None or not thread.is_alive():
            return True
        finished = wait_for_thread(thread, self._timing, on_abort=lambda: None)
        if not finished:
            logger.error("export did not finish within %.3fs", self._timing.give_up_after)
        return finished

    def _run(self, result: SearchResult, export_dir: Path) -> None:
        try:
            path = self._export(result, export_dir)
        except Exception:
            logger.exception("failed to export search results to %s", export_dir)
            self._send(ExportFailure(EXPORT_WRITE_FAILED))
            return
        logger.info("exported %d search results to %s", len(result.entries), path)
        self._send(ExportDone(path))

    def _send(self, action: Action) -> None:
        try:
            self._sender.send(action)
        except ChannelClosed:
            logger.error("dropped %s: action channel closed", type(action).__name__)


__all__ = ["EXPORT_WRITE_FAILED", "ExportTask"]
