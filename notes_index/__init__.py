from notes_index.errors import (
    DocumentReadError,
    DuplicateDocumentError,
    IndexBuildError,
    NotFoundError,
    NotesIndexError,
)
from notes_index.indexes import build_index
from notes_index.ingestion import ParserConfig, SectionSequence, parse_document, parse_sections
from notes_index.llm import LlmConfig, LlmSummarizer, load_summarizer_from_env
from notes_index.loader import discover_paths, load_index, read_documents
from notes_index.retrieval import IndexQuery
from notes_index.schemas import Document, IndexEntry, NotesIndex, Section

__all__ = [
    "Document",
    "DocumentReadError",
    "DuplicateDocumentError",
    "IndexBuildError",
    "IndexEntry",
    "IndexQuery",
    "LlmConfig",
    "LlmSummarizer",
    "NotFoundError",
    "NotesIndex",
    "NotesIndexError",
    "ParserConfig",
    "Section",
    "SectionSequence",
    "build_index",
    "discover_paths",
    "load_index",
    "load_summarizer_from_env",
    "parse_document",
    "parse_sections",
    "read_documents",
]
