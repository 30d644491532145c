from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class NotesIndexError(Exception):
    """Base class for every error raised by notes_index."""


class IndexBuildError(NotesIndexError):
    """Raised while building an index; no partial index is ever returned."""


class DuplicateDocumentError(IndexBuildError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Duplicate document name: {self.name!r}"


class DocumentReadError(IndexBuildError, OSError):
    def __init__(self, path: Union[str, Path], reason: Optional[str] = None) -> None:
        self.path = str(path)
        self.reason = reason
        # OSError.__init__ would reinterpret the arguments as errno/strerror
        Exception.__init__(self, self.path, reason)

    def __str__(self) -> str:
        message = f"Cannot read document {self.path!r}"
        if self.reason:
            message = f"{message}: {self.reason}"
        return message


class NotFoundError(NotesIndexError, LookupError):
    pass
