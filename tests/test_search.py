from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from dirscout.file_model.search import SearchMode, get_recursive_metadata, search
from dirscout.runtime.cancellation import CancellationToken, OperationCancelled


def _build_tree(root: Path) -> None:
    (root / "x").mkdir()
    (root / "app.log").write_text("12345", encoding="utf-8")
    (root / "x" / "app.log").write_text("123", encoding="utf-8")
    (root / "x" / "other.txt").write_text("1", encoding="utf-8")


class SearchTests(unittest.TestCase):
    def test_flat_mode_only_matches_top_level(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_tree(root)

            result = search(root, "log", SearchMode.FLAT.max_depth, False)

            assert result is not None
            self.assertEqual([entry.path for entry in result.entries], [root / "app.log"])

    def test_deep_mode_matches_nested_entries_in_walk_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_tree(root)

            result = search(root, "log", SearchMode.DEEP.max_depth, False)

            assert result is not None
            self.assertEqual(
                [entry.path for entry in result.entries],
                [root / "app.log", root / "x" / "app.log"],
            )
            self.assertEqual(result.query, "log")
            self.assertEqual(result.viewport.length, 2)

    def test_match_ignores_case_and_includes_directories(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_tree(root)

            upper = search(root, "LOG", None, False)
            directory = search(root, "x", None, False)

            assert upper is not None and directory is not None
            self.assertEqual(len(upper.entries), 2)
            self.assertEqual([(entry.name, entry.is_dir) for entry in directory.entries], [("x", True), ("other.txt", False)])

    def test_no_matches_returns_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_tree(root)

            self.assertIsNone(search(root, "missing", None, False))

    def test_progress_reported_after_every_entry(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_tree(root)
            calls: list[tuple[int, int]] = []

            search(root, "log", None, False, progress=lambda files, dirs: calls.append((files, dirs)))

            self.assertEqual(calls, [(1, 0), (1, 1), (2, 1), (3, 1)])

    def test_cancelled_token_stops_walk(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_tree(root)
            token = CancellationToken()
            calls: list[tuple[int, int]] = []

            def progress(files: int, dirs: int) -> None:
                calls.append((files, dirs))
                token.cancel()

            with self.assertRaises(OperationCancelled):
                search(root, "log", None, False, progress=progress, token=token)
            self.assertEqual(len(calls), 1)


class RecursiveMetadataTests(unittest.TestCase):
    def test_counts_and_sizes_accumulate(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_tree(root)
            calls: list[tuple[int, int]] = []

            metadata = get_recursive_metadata("tmp", root, False, progress=lambda f, d: calls.append((f, d)))

            assert metadata is not None
            self.assertEqual(metadata.dir_name, "tmp")
            self.assertEqual(metadata.file_count, 3)
            self.assertEqual(metadata.dir_count, 1)
            self.assertEqual(metadata.total_size, 9)
            self.assertEqual(calls[-1], (3, 1))
            self.assertEqual(len(calls), 4)

    def test_missing_directory_returns_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertIsNone(get_recursive_metadata("gone", Path(tmp) / "gone", False))


if __name__ == "__main__":
    unittest.main()
