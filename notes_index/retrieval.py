from __future__ import annotations

from typing import Iterator

from notes_index.errors import NotFoundError
from notes_index.schemas import Document, IndexEntry, NotesIndex, Section


def _valid_position(value: object, size: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < size


class IndexQuery:
    """Read-only lookups over a built NotesIndex.

    Holds no state besides the index itself, so one instance can serve any
    number of threads.
    """

    def __init__(self, index: NotesIndex) -> None:
        self.index = index

    def get_document(self, doc_id: int) -> Document:
        if not _valid_position(doc_id, self.index.document_count):
            raise NotFoundError(f"No document with id {doc_id!r}")
        return self.index.documents[doc_id]

    def get_section(self, doc_id: int, position: int) -> Section:
        document = self.get_document(doc_id)
        if not _valid_position(position, len(document.sections)):
            raise NotFoundError(f"No section {position!r} in document {doc_id} ({document.name})")
        return document.sections[position]

    def get_entry(self, ordinal: int) -> IndexEntry:
        if not _valid_position(ordinal, self.index.section_count):
            raise NotFoundError(f"No section with ordinal {ordinal!r}")
        return self.index.entries[ordinal]

    def find_document(self, name: str) -> Document:
        doc_id = self.index.name_lookup.get(name)
        if doc_id is None:
            raise NotFoundError(f"No document named {name!r}")
        return self.index.documents[doc_id]

    def search_entries(self, substring: str) -> Iterator[IndexEntry]:
        needle = substring.casefold()
        for entry in self.index.entries:
            section = entry.section
            if needle in section.heading.casefold() or needle in section.body.casefold():
                yield entry

    def search(self, substring: str) -> Iterator[Section]:
        for entry in self.search_entries(substring):
            yield entry.section
