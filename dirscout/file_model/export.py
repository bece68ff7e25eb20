"""JSON export of search results."""

from __future__ import annotations

import json
import mimetypes
from datetime import datetime
from pathlib import Path
from typing import Any

from .paths import format_size
from .search import SearchResult
from .types import DiskEntry

EXPORT_FILE_PREFIX = "search_results_"
EXPORT_TIME_FORMAT = "%Y-%m-%dT%H_%M_%S"
UNKNOWN_FORMAT = "Unknown"


def export_file_name(now: datetime) -> str:
    return f"{EXPORT_FILE_PREFIX}{now.strftime(EXPORT_TIME_FORMAT)}.json"


def guess_format(path: Path) -> str:
    mime_type, _encoding = mimetypes.guess_type(path.name)
    return mime_type or UNKNOWN_FORMAT


def entry_record(entry: DiskEntry) -> dict[str, Any]:
    if entry.is_dir:
        return {
            "path": str(entry.path),
            "name": entry.name,
            "type": "Directory",
        }
    size = entry.file_metadata.size if entry.file_metadata is not None else 0
    return {
        "path": str(entry.path),
        "name": entry.name,
        "type": "File",
        "format": guess_format(entry.path),
        "size": format_size(size),
    }


def export_search_result(
    result: SearchResult,
    export_dir: Path,
    now: datetime | None = None,
) -> Path:
    """Write ``result`` to a timestamped JSON file in ``export_dir`` and return its path.

    Raises ``OSError`` when the directory cannot be created or written.
    """
    stamp = now or datetime.now()
    export_dir.mkdir(parents=True, exist_ok=True)
    target = export_dir / export_file_name(stamp)
    document = {
        "search_query": result.query,
        "results": [entry_record(entry) for entry in result.entries],
    }
    target.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
    return target


__all__ = [
    "EXPORT_FILE_PREFIX",
    "entry_record",
    "export_file_name",
    "export_search_result",
    "guess_format",
]
