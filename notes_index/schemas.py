from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple


@dataclass(frozen=True)
class Section:
    heading: str
    level: int
    body: str = ""


@dataclass(frozen=True)
class Document:
    doc_id: int
    name: str
    sections: Tuple[Section, ...] = ()
    preamble: str = ""

    def headings(self) -> Tuple[str, ...]:
        return tuple(section.heading for section in self.sections)


@dataclass(frozen=True)
class IndexEntry:
    ordinal: int
    doc_id: int
    position: int
    section: Section


@dataclass(frozen=True)
class NotesIndex:
    """Immutable aggregate of every document parsed in one build pass."""

    documents: Mapping[int, Document]
    entries: Tuple[IndexEntry, ...]
    name_lookup: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # read-only views over private copies
        object.__setattr__(self, "documents", MappingProxyType(dict(self.documents)))
        object.__setattr__(self, "entries", tuple(self.entries))
        object.__setattr__(self, "name_lookup", MappingProxyType(dict(self.name_lookup)))

    @property
    def document_count(self) -> int:
        return len(self.documents)

    @property
    def section_count(self) -> int:
        return len(self.entries)

    def names(self) -> Tuple[str, ...]:
        return tuple(self.documents[doc_id].name for doc_id in sorted(self.documents))

