from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterator, List, Optional, Tuple, Union

from notes_index.schemas import Document, Section


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParserConfig:
    marker: str = "#"
    max_level: int = 6
    fence_markers: Tuple[str, ...] = ("```", "~~~")

    def __post_init__(self) -> None:
        if len(self.marker) != 1 or self.marker.isspace():
            raise ValueError(f"marker must be one non-whitespace character, got {self.marker!r}")
        if self.max_level < 1:
            raise ValueError(f"max_level must be >= 1, got {self.max_level}")

    @property
    def heading_re(self) -> "re.Pattern[str]":
        return _heading_pattern(self.marker, self.max_level)


@lru_cache(maxsize=None)
def _heading_pattern(marker: str, max_level: int) -> "re.Pattern[str]":
    run = re.escape(marker)
    return re.compile(rf"^({run}{{1,{max_level}}})[ \t]+(.*?)(?:[ \t]+{run}+)?[ \t]*$")


@dataclass(frozen=True)
class HeadingLine:
    level: int
    text: str


@dataclass(frozen=True)
class BodyLine:
    text: str


ClassifiedLine = Union[HeadingLine, BodyLine]


@dataclass
class ScanState:
    open_fence: Optional[str] = None


def _marker_run(stripped: str) -> str:
    char = stripped[0]
    return stripped[: len(stripped) - len(stripped.lstrip(char))]


def _closes_fence(stripped: str, opening: str) -> bool:
    # a closing fence is a bare run of the opening character, at least as long
    run = stripped.rstrip()
    return len(run) >= len(opening) and run == opening[0] * len(run)


def classify_line(line: str, state: ScanState, config: ParserConfig) -> ClassifiedLine:
    """Tag one line as a heading or body text, tracking fenced blocks in ``state``.

    ``line`` may carry its line ending; body lines keep it verbatim.
    """
    content = line.rstrip("\r\n")
    stripped = content.lstrip()
    if state.open_fence is not None:
        if _closes_fence(stripped, state.open_fence):
            state.open_fence = None
        return BodyLine(line)
    for fence in config.fence_markers:
        if stripped.startswith(fence):
            state.open_fence = _marker_run(stripped)
            return BodyLine(line)

    match = config.heading_re.match(content)
    if not match:
        return BodyLine(line)
    head = match.group(2).strip()
    if not head:
        return BodyLine(line)
    return HeadingLine(level=len(match.group(1)), text=head)


def iter_classified(text: str, config: ParserConfig) -> Iterator[ClassifiedLine]:
    state = ScanState()
    for line in text.splitlines(keepends=True):
        yield classify_line(line, state, config)


@dataclass
class _OpenSection:
    heading: HeadingLine
    lines: List[str] = field(default_factory=list)

    def close(self) -> Section:
        return Section(heading=self.heading.text, level=self.heading.level, body="".join(self.lines))


def _scan(text: str, config: ParserConfig) -> Iterator[Union[str, Section]]:
    # yields the preamble (possibly empty) first, then sections in source order
    preamble: List[str] = []
    current: Optional[_OpenSection] = None
    for item in iter_classified(text, config):
        if isinstance(item, HeadingLine):
            if current is None:
                yield "".join(preamble)
            else:
                if item.level > current.heading.level + 1:
                    logger.debug(
                        "Heading level skip %d -> %d at %r",
                        current.heading.level, item.level, item.text,
                    )
                yield current.close()
            current = _OpenSection(heading=item)
        elif current is None:
            preamble.append(item.text)
        else:
            current.lines.append(item.text)
    if current is None:
        yield "".join(preamble)
    else:
        yield current.close()


class SectionSequence:
    """Lazy, restartable view over the sections of one text.

    Each iteration re-scans the source text, so the sequence can be consumed
    any number of times and always yields the same sections.
    """

    def __init__(self, text: str, config: Optional[ParserConfig] = None) -> None:
        if not isinstance(text, str):
            raise TypeError(f"expected str text, got {type(text).__name__}")
        self.text = text
        self.config = config or ParserConfig()

    def __iter__(self) -> Iterator[Section]:
        for item in _scan(self.text, self.config):
            if isinstance(item, Section):
                yield item

    def preamble(self) -> str:
        return next(item for item in _scan(self.text, self.config) if isinstance(item, str))


def parse_sections(text: str, config: Optional[ParserConfig] = None) -> SectionSequence:
    return SectionSequence(text, config)


def parse_document(
    name: str,
    text: str,
    doc_id: int = 0,
    config: Optional[ParserConfig] = None,
) -> Document:
    sequence = parse_sections(text, config)
    sections = tuple(sequence)
    if not sections:
        logger.info("No headings found in %s", name)
    return Document(doc_id=doc_id, name=name, sections=sections, preamble=sequence.preamble())


def reconstruct_lines(document: Document, marker: str = "#") -> List[str]:
    """Rebuild the source line sequence from a parsed document.

    Heading lines come back in normalized ``<marker run> <text>`` form.
    """
    lines = document.preamble.splitlines()
    for section in document.sections:
        lines.append(f"{marker * section.level} {section.heading}")
        lines.extend(section.body.splitlines())
    return lines
