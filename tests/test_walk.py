from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from dirscout.file_model.search import search
from dirscout.file_model.walk import walk_entries
from dirscout.runtime.cancellation import CancellationToken, OperationCancelled


class WalkEntriesTests(unittest.TestCase):
    def test_depth_first_pre_order_sorted_by_name(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "b").mkdir()
            (root / "b" / "inner.txt").write_text("", encoding="utf-8")
            (root / "a.txt").write_text("", encoding="utf-8")
            (root / "c.txt").write_text("", encoding="utf-8")

            visited = [(entry.name, entry.depth) for entry in walk_entries(root, sort_by_name=True)]

            self.assertEqual(visited, [("a.txt", 1), ("b", 1), ("inner.txt", 2), ("c.txt", 1)])

    def test_max_depth_limits_descent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "d" / "e").mkdir(parents=True)

            names = [entry.name for entry in walk_entries(root, max_depth=1)]
            nothing = list(walk_entries(root, max_depth=0))

            self.assertEqual(names, ["d"])
            self.assertEqual(nothing, [])

    def test_symlinked_directory_not_followed_by_default(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "real").mkdir()
            (root / "real" / "file.txt").write_text("", encoding="utf-8")
            os.symlink(root / "real", root / "link")

            entries = {entry.name: entry for entry in walk_entries(root)}

            self.assertFalse(entries["link"].is_dir)
            self.assertEqual(sorted(entries), ["file.txt", "link", "real"])

    def test_symlink_loop_terminates_when_following(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "sub").mkdir()
            os.symlink(root, root / "sub" / "loop")

            names = [entry.name for entry in walk_entries(root, follow_symlinks=True, sort_by_name=True)]

            self.assertEqual(names, ["sub", "loop"])

    def test_dangling_symlink_is_kept_when_following(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            os.symlink(root / "missing", root / "dangling")

            entries = list(walk_entries(root, follow_symlinks=True))

            self.assertEqual([(entry.name, entry.is_dir, entry.stat) for entry in entries], [("dangling", False, None)])

    def test_unreadable_root_yields_nothing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(list(walk_entries(Path(tmp) / "missing")), [])

    def test_cancellation_checked_before_each_entry(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("a", "b", "c"):
                (root / name).write_text("", encoding="utf-8")
            token = CancellationToken()
            walker = walk_entries(root, sort_by_name=True, token=token)

            self.assertEqual(next(walker).name, "a")
            token.cancel()

            with self.assertRaises(OperationCancelled):
                next(walker)

    def test_cancellation_inside_wide_directory_stops_listing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for index in range(200):
                (root / f"f{index:03d}").write_text("", encoding="utf-8")
            token = CancellationToken()
            counts = {"listed": 0, "stat": 0}
            real_scandir = os.scandir

            class CountingEntry:
                def __init__(self, entry: os.DirEntry) -> None:
                    self._entry = entry
                    self.name = entry.name
                    self.path = entry.path

                def is_dir(self, follow_symlinks: bool = True) -> bool:
                    return self._entry.is_dir(follow_symlinks=follow_symlinks)

                def is_symlink(self) -> bool:
                    return self._entry.is_symlink()

                def stat(self, follow_symlinks: bool = True) -> os.stat_result:
                    counts["stat"] += 1
                    return self._entry.stat(follow_symlinks=follow_symlinks)

            class CancellingScandir:
                def __init__(self, path) -> None:
                    self._inner = real_scandir(path)

                def __enter__(self):
                    return self._entries()

                def __exit__(self, *exc_info) -> None:
                    self._inner.close()

                def _entries(self):
                    for entry in self._inner:
                        counts["listed"] += 1
                        if counts["listed"] == 2:
                            token.cancel()
                        yield CountingEntry(entry)

            progress: list[tuple[int, int]] = []
            with mock.patch("dirscout.file_model.walk.os.scandir", CancellingScandir):
                with self.assertRaises(OperationCancelled):
                    search(root, "f", None, False, lambda files, dirs: progress.append((files, dirs)), token)

            self.assertEqual(counts["listed"], 2)
            self.assertEqual(counts["stat"], 0)
            self.assertEqual(progress, [])

    def test_stat_happens_when_entry_is_visited(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("a", "b", "c"):
                (root / name).write_text("x", encoding="utf-8")

            walker = walk_entries(root, sort_by_name=True)
            first = next(walker)

            self.assertEqual(first.name, "a")
            self.assertEqual(first.stat.st_size, 1)
            self.assertEqual([entry.name for entry in walker], ["b", "c"])


if __name__ == "__main__":
    unittest.main()
