from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set, Tuple, Union

from notes_index.errors import DocumentReadError, DuplicateDocumentError
from notes_index.indexes import build_index
from notes_index.ingestion import ParserConfig
from notes_index.schemas import NotesIndex


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError as exc:
        raise DocumentReadError(path, str(exc)) from exc


def discover_paths(directory: PathLike, pattern: str = "*.md", recursive: bool = True) -> List[Path]:
    root = Path(directory)
    if not _is_dir(root):
        raise DocumentReadError(root, "not a directory")
    try:
        matches = root.rglob(pattern) if recursive else root.glob(pattern)
        return sorted(path for path in matches if path.is_file())
    except OSError as exc:
        raise DocumentReadError(root, str(exc)) from exc


def _document_name(path: Path, root: Optional[Path]) -> str:
    if root is not None:
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            pass
    return path.as_posix()


def _read_text(path: Path, encoding: str) -> str:
    try:
        with open(path, "r", encoding=encoding) as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentReadError(path, str(exc)) from exc


def read_documents(
    paths: Iterable[PathLike],
    root: Optional[PathLike] = None,
    encoding: str = "utf-8",
) -> List[Tuple[str, str]]:
    base = Path(root) if root is not None else None
    return [
        (_document_name(Path(raw_path), base), _read_text(Path(raw_path), encoding))
        for raw_path in paths
    ]


def expand_sources(sources: Sequence[PathLike], pattern: str = "*.md") -> List[Tuple[Path, str]]:
    """Turn directories and files into ``(path, name)`` pairs in a stable order.

    With a single directory, names are relative to it. With several sources,
    files found in a directory keep the directory prefix so equal file names
    in different directories stay distinct.
    """
    expanded: List[Tuple[Path, str]] = []
    for source in sources:
        path = Path(source)
        if _is_dir(path):
            root = path if len(sources) == 1 else None
            expanded.extend((found, _document_name(found, root)) for found in discover_paths(path, pattern))
        else:
            expanded.append((path, path.as_posix()))
    return expanded


def _resolved(path: Path) -> Path:
    try:
        return path.resolve()
    except (OSError, RuntimeError) as exc:
        raise DocumentReadError(path, str(exc)) from exc


def load_index(
    sources: Union[PathLike, Sequence[PathLike]],
    config: Optional[ParserConfig] = None,
    pattern: str = "*.md",
    encoding: str = "utf-8",
) -> NotesIndex:
    if isinstance(sources, (str, Path)):
        sources = [sources]
    named_texts = []
    seen: Set[Path] = set()
    for path, name in expand_sources(list(sources), pattern):
        resolved = _resolved(path)
        if resolved in seen:
            raise DuplicateDocumentError(name)
        seen.add(resolved)
        named_texts.append((name, _read_text(path, encoding)))
    logger.info("Loaded %d documents", len(named_texts))
    return build_index(named_texts, config=config)
