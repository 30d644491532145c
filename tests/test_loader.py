import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from notes_index.errors import DocumentReadError, DuplicateDocumentError
from notes_index.loader import discover_paths, load_index, read_documents


FIXTURES = Path(__file__).parent / "fixtures" / "notes"


class LoaderTests(unittest.TestCase):
    def test_discover_paths_is_sorted_and_filtered(self) -> None:
        paths = discover_paths(FIXTURES)
        self.assertEqual([p.name for p in paths], ["day01.md", "day02.md"])

    def test_load_index_from_directory(self) -> None:
        index = load_index(FIXTURES)

        self.assertEqual(index.names(), ("day01.md", "day02.md"))
        self.assertEqual(index.section_count, 6)

    def test_explicit_file_list_keeps_given_order(self) -> None:
        index = load_index([FIXTURES / "day02.md", FIXTURES / "day01.md"])
        self.assertTrue(index.documents[0].name.endswith("day02.md"))

    def test_same_file_twice_is_a_duplicate(self) -> None:
        path = FIXTURES / "day01.md"
        with self.assertRaises(DuplicateDocumentError):
            load_index([path, path])

    def test_missing_file_names_the_path(self) -> None:
        missing = FIXTURES / "day99.md"
        with self.assertRaises(DocumentReadError) as ctx:
            read_documents([missing])

        self.assertEqual(ctx.exception.path, str(missing))
        self.assertIn("day99.md", str(ctx.exception))
        self.assertIsInstance(ctx.exception, OSError)

    def test_undecodable_file_fails_the_build(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            bad = os.path.join(tmp, "bad.md")
            with open(bad, "wb") as handle:
                handle.write(b"# Title\n\xff\xfe\xfa\n")
            with self.assertRaises(DocumentReadError):
                load_index(tmp)

    def test_nested_directories_use_relative_names(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            nested = Path(tmp) / "week1"
            nested.mkdir()
            (nested / "day01.md").write_text("# Heap\n", encoding="utf-8")
            index = load_index(tmp)
        self.assertEqual(index.names(), ("week1/day01.md",))

    def test_same_file_name_in_two_directories(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            for week in ("week1", "week2"):
                folder = Path(tmp) / week
                folder.mkdir()
                (folder / "day01.md").write_text(f"# {week}\n", encoding="utf-8")
            index = load_index([Path(tmp) / "week1", Path(tmp) / "week2"])

        self.assertEqual(index.document_count, 2)
        names = index.names()
        self.assertTrue(names[0].endswith("week1/day01.md"))
        self.assertTrue(names[1].endswith("week2/day01.md"))

    def test_directory_and_file_inside_it_is_a_duplicate(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / "a.md").write_text("# A\n", encoding="utf-8")
            with self.assertRaises(DuplicateDocumentError):
                load_index([tmp, Path(tmp) / "a.md"])

    def test_permission_error_during_discovery_names_the_path(self) -> None:
        denied = PermissionError(13, "Permission denied")
        with mock.patch.object(Path, "is_dir", side_effect=denied):
            with self.assertRaises(DocumentReadError) as ctx:
                load_index(["/locked/dir/f.md"])

        self.assertIn("/locked/dir/f.md", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, PermissionError)


if __name__ == "__main__":
    unittest.main()
