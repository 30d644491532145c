import unittest
from concurrent.futures import ThreadPoolExecutor

from notes_index.errors import NotFoundError
from notes_index.indexes import build_index
from notes_index.retrieval import IndexQuery


class IndexQueryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.index = build_index(
            [
                ("strings.md", "# Strings\nImmutable values.\n## Pool\nInterned literals.\n"),
                ("threads.md", "# Concurrency\nEvery Thread has a stack.\n"),
                ("empty.md", "no headings here\n"),
            ]
        )
        self.query = IndexQuery(self.index)

    def test_get_document_in_range(self) -> None:
        for doc_id in range(self.index.document_count):
            self.assertEqual(self.query.get_document(doc_id).doc_id, doc_id)

    def test_get_document_out_of_range(self) -> None:
        for doc_id in (-1, 3, 100, "0", None, True):
            with self.assertRaises(NotFoundError):
                self.query.get_document(doc_id)  # type: ignore[arg-type]

    def test_get_section_in_and_out_of_range(self) -> None:
        self.assertEqual(self.query.get_section(0, 1).heading, "Pool")
        for doc_id, position in ((0, 2), (0, -1), (1, 1), (2, 0), (7, 0)):
            with self.assertRaises(NotFoundError):
                self.query.get_section(doc_id, position)

    def test_not_found_is_a_lookup_error(self) -> None:
        with self.assertRaises(LookupError):
            self.query.get_entry(3)

    def test_find_document_by_name(self) -> None:
        self.assertEqual(self.query.find_document("threads.md").doc_id, 1)
        with self.assertRaises(NotFoundError):
            self.query.find_document("missing.md")

    def test_empty_substring_matches_every_section_once(self) -> None:
        matches = list(self.query.search(""))
        self.assertEqual(matches, [entry.section for entry in self.index.entries])

    def test_search_is_case_insensitive(self) -> None:
        matches = list(self.query.search("thread"))
        self.assertEqual([s.heading for s in matches], ["Concurrency"])
        self.assertEqual([s.heading for s in self.query.search("POOL")], ["Pool"])

    def test_search_matches_headings_and_bodies_in_index_order(self) -> None:
        entries = list(self.query.search_entries("in"))
        self.assertEqual([e.ordinal for e in entries], [0, 1])

    def test_no_match_is_empty(self) -> None:
        self.assertEqual(list(self.query.search("garbage collector")), [])

    def test_search_is_lazy(self) -> None:
        results = self.query.search("")
        self.assertEqual(next(results).heading, "Strings")

    def test_failed_lookup_leaves_index_usable(self) -> None:
        with self.assertRaises(NotFoundError):
            self.query.get_document(9)
        self.assertEqual(self.query.get_document(0).name, "strings.md")

    def test_concurrent_readers(self) -> None:
        expected = [s.heading for s in self.query.search("")]

        def read(_):
            return [s.heading for s in self.query.search("")]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(read, range(32)))
        self.assertTrue(all(result == expected for result in results))


if __name__ == "__main__":
    unittest.main()
