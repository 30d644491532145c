from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from notes_index.errors import DuplicateDocumentError
from notes_index.ingestion import ParserConfig, parse_document
from notes_index.schemas import Document, IndexEntry, NotesIndex


logger = logging.getLogger(__name__)


def build_index(
    named_texts: Iterable[Tuple[str, str]],
    config: Optional[ParserConfig] = None,
) -> NotesIndex:
    """Parse every ``(name, text)`` pair and aggregate the results.

    Ids follow input order. A repeated name raises DuplicateDocumentError
    before anything is returned, so callers never see a partial index.
    """
    config = config or ParserConfig()
    documents: Dict[int, Document] = {}
    name_lookup: Dict[str, int] = {}
    entries: List[IndexEntry] = []

    for doc_id, (name, text) in enumerate(named_texts):
        if name in name_lookup:
            raise DuplicateDocumentError(name)
        document = parse_document(name, text, doc_id=doc_id, config=config)
        documents[doc_id] = document
        name_lookup[name] = doc_id
        for position, section in enumerate(document.sections):
            entries.append(
                IndexEntry(
                    ordinal=len(entries),
                    doc_id=doc_id,
                    position=position,
                    section=section,
                )
            )
        logger.debug("Parsed %s as doc %d (%d sections)", name, doc_id, len(document.sections))

    index = NotesIndex(documents=documents, entries=tuple(entries), name_lookup=name_lookup)
    logger.info(
        "Built index: %d documents, %d sections", index.document_count, index.section_count
    )
    return index
