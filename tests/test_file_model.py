from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from dirscout.file_model.explorer import load_directory
from dirscout.file_model.filtered import FilteredEntries
from dirscout.file_model.types import PARENT_DIR_NAME


def _touch(path: Path, text: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class LoadDirectoryTests(unittest.TestCase):
    def test_directories_first_then_files_each_sorted(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "b.txt")
            _touch(root / "a.txt", "abc")
            (root / "Sub").mkdir()

            explorer = load_directory(root, follow_symlinks=False)

            self.assertEqual(
                [entry.name for entry in explorer.entries],
                [PARENT_DIR_NAME, f"Sub{os.sep}", "a.txt", "b.txt"],
            )
            self.assertEqual(explorer.dir_count, 1)
            self.assertEqual(explorer.file_count, 2)
            self.assertEqual(explorer.cwd, root.absolute())

    def test_parent_entry_points_at_parent_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            explorer = load_directory(Path(tmp), follow_symlinks=False)

            parent = explorer.entries[0]
            self.assertTrue(parent.is_parent_entry)
            self.assertTrue(parent.is_dir)
            self.assertEqual(parent.path, Path(tmp).absolute().parent)

    def test_filesystem_root_has_no_parent_entry(self) -> None:
        explorer = load_directory(Path(os.sep), follow_symlinks=False)
        self.assertFalse(any(entry.is_parent_entry for entry in explorer.entries))

    def test_names_sort_case_sensitively(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "alpha")
            _touch(root / "Zeta")

            explorer = load_directory(root, follow_symlinks=False)

            self.assertEqual([entry.name for entry in explorer.entries[1:]], ["Zeta", "alpha"])

    def test_file_metadata_is_captured_for_files_only(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "a.txt", "abc")
            (root / "Sub").mkdir()

            explorer = load_directory(root, follow_symlinks=False)
            by_name = {entry.name: entry for entry in explorer.entries}

            file_entry = by_name["a.txt"]
            assert file_entry.file_metadata is not None
            self.assertEqual(file_entry.file_metadata.size, 3)
            self.assertIsNotNone(file_entry.file_metadata.modified)
            self.assertIsNone(by_name[f"Sub{os.sep}"].file_metadata)

    def test_viewport_length_matches_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("one", "two", "three"):
                _touch(root / name)

            explorer = load_directory(root, follow_symlinks=False)

            self.assertEqual(explorer.viewport.length, 4)
            self.assertEqual(explorer.selected, 0)


class InitialLetterIndexTests(unittest.TestCase):
    def _explorer(self, root: Path):
        (root / "Alpha").mkdir()
        (root / "beta").mkdir()
        for name in ("apple.txt", "avocado.txt", "banana.txt"):
            _touch(root / name)
        return load_directory(root, follow_symlinks=False)

    def test_matches_ignore_case_and_skip_parent_row(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            explorer = self._explorer(Path(tmp))

            found = explorer.find_entries_with_initial("A")

            assert found is not None
            self.assertEqual(found.indices, [1, 3, 4])
            self.assertEqual(explorer.find_entries_with_initial("a").indices, [1, 3, 4])
            self.assertIsNone(explorer.find_entries_with_initial("."))
            self.assertIsNone(explorer.find_entries_with_initial("z"))

    def test_find_next_cycles_through_matches(self) -> None:
        filtered = FilteredEntries(initial="a", indices=[1, 3, 4])

        self.assertEqual(filtered.find_next(0), 1)
        self.assertEqual(filtered.hint_pos, 1)
        self.assertEqual(filtered.find_next(1), 3)
        self.assertEqual(filtered.find_next(3), 4)
        self.assertEqual(filtered.hint_pos, 3)
        self.assertEqual(filtered.find_next(4), 1)
        self.assertEqual(filtered.hint_pos, 1)

    def test_find_next_len_times_returns_to_first_match(self) -> None:
        filtered = FilteredEntries(initial="a", indices=[2, 5, 6, 9])
        selected = filtered.find_next(0)
        assert selected is not None
        first = selected
        for _ in range(len(filtered.indices)):
            selected = filtered.find_next(selected)
        self.assertEqual(selected, first)

    def test_find_next_from_between_and_past_matches(self) -> None:
        filtered = FilteredEntries(initial="a", indices=[1, 3, 4])

        self.assertEqual(filtered.find_next(2), 3)
        self.assertEqual(filtered.hint_pos, 2)
        self.assertEqual(filtered.find_next(7), 1)

    def test_matches_letter_and_reset(self) -> None:
        filtered = FilteredEntries(initial="a", indices=[1])
        self.assertTrue(filtered.matches_letter("A"))
        self.assertFalse(filtered.matches_letter("b"))

        filtered.reset()

        self.assertFalse(filtered.matches_letter("a"))
        self.assertIsNone(filtered.find_next(0))
        self.assertEqual(filtered.total, 0)


if __name__ == "__main__":
    unittest.main()
