from __future__ import annotations

import json
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from dirscout.file_model.export import entry_record, export_file_name, export_search_result, guess_format
from dirscout.file_model.search import SearchResult
from dirscout.file_model.types import DiskEntry, FileMetadata


def _file(path: str, size: int) -> DiskEntry:
    metadata = FileMetadata(created=None, last_access=None, modified=None, size=size, read_only=False)
    return DiskEntry(name=Path(path).name, path=Path(path), is_dir=False, file_metadata=metadata)


class ExportTests(unittest.TestCase):
    def test_file_name_uses_timestamp(self) -> None:
        self.assertEqual(
            export_file_name(datetime(2024, 3, 9, 7, 5, 1)),
            "search_results_2024-03-09T07_05_01.json",
        )

    def test_format_falls_back_to_unknown(self) -> None:
        self.assertEqual(guess_format(Path("notes.txt")), "text/plain")
        self.assertEqual(guess_format(Path("blob.zzqq")), "Unknown")

    def test_directory_record_has_no_size(self) -> None:
        record = entry_record(DiskEntry(name="docs", path=Path("/data/docs"), is_dir=True))

        self.assertEqual(record, {"path": "/data/docs", "name": "docs", "type": "Directory"})

    def test_export_writes_query_and_records(self) -> None:
        result = SearchResult(
            root=Path("/data"),
            display_name="/data",
            query="note",
            entries=(
                DiskEntry(name="notes", path=Path("/data/notes"), is_dir=True),
                _file("/data/notes/note.txt", 2048),
            ),
        )
        with tempfile.TemporaryDirectory() as tmp:
            export_dir = Path(tmp) / "exports"

            target = export_search_result(result, export_dir, now=datetime(2024, 1, 2, 3, 4, 5))

            self.assertEqual(target, export_dir / "search_results_2024-01-02T03_04_05.json")
            document = json.loads(target.read_text(encoding="utf-8"))

        self.assertEqual(document["search_query"], "note")
        self.assertEqual(len(document["results"]), 2)
        self.assertEqual(
            document["results"][1],
            {
                "path": "/data/notes/note.txt",
                "name": "note.txt",
                "type": "File",
                "format": "text/plain",
                "size": "2.0 KiB",
            },
        )

    def test_unwritable_target_raises_os_error(self) -> None:
        result = SearchResult(root=Path("/data"), display_name="/data", query="x", entries=())
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("", encoding="utf-8")

            with self.assertRaises(OSError):
                export_search_result(result, blocker / "exports")


if __name__ == "__main__":
    unittest.main()
