"""Command-line search over a directory of study notes."""

import argparse
import logging
import sys
from typing import Callable, List, Optional

from notes_index.config import load_settings_from_env
from notes_index.errors import NotesIndexError
from notes_index.ingestion import ParserConfig
from notes_index.llm import load_summarizer_from_env
from notes_index.loader import load_index
from notes_index.retrieval import IndexQuery
from notes_index.schemas import IndexEntry
from notes_index.utils import dedupe_preserve_order, excerpt

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def build_parser(settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notes-index",
        description="Search the sections of a directory of markdown study notes.",
    )
    parser.add_argument("keyword", help="Case-insensitive substring to look for")
    parser.add_argument("sources", nargs="+", help="Note directories or files")
    parser.add_argument("--pattern", default=settings.pattern,
                        help="Glob for files inside directories (default: %(default)s)")
    parser.add_argument("--limit", type=_positive_int, default=None,
                        help="Stop after this many matches")
    parser.add_argument("--excerpt-chars", type=_positive_int, default=settings.excerpt_chars)
    parser.add_argument("--summarize", action="store_true",
                        help="Summarize bodies with the LLM configured by LLM_API_URL")
    parser.add_argument("--log-level", default=settings.log_level,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def format_entry(entry: IndexEntry, name: str, body_text: str) -> str:
    section = entry.section
    lines = [f"{name} #{entry.position} [{section.level}] {section.heading}"]
    if body_text:
        lines.append(f"    {body_text}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = load_settings_from_env()
    except ValueError as exc:
        print(f"ConfigError: {exc}", file=sys.stderr)
        return 1
    args = build_parser(settings).parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level, logging.WARNING),
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        index = load_index(args.sources, config=ParserConfig(marker=settings.marker),
                           pattern=args.pattern)
    except NotesIndexError as exc:
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"ConfigError: {exc}", file=sys.stderr)
        return 1

    render: Callable[[str], str] = lambda body: excerpt(body, args.excerpt_chars)
    if args.summarize:
        try:
            summarizer = load_summarizer_from_env()
        except ValueError as exc:
            print(f"ConfigError: {exc}", file=sys.stderr)
            return 1
        if summarizer is None:
            logger.warning("--summarize given but LLM_API_URL is not set; using excerpts")
        else:
            render = summarizer.summarize

    query = IndexQuery(index)
    matched_names = []
    count = 0
    for entry in query.search_entries(args.keyword):
        if args.limit is not None and count >= args.limit:
            break
        name = index.documents[entry.doc_id].name
        body = entry.section.body.strip()
        print(format_entry(entry, name, render(body) if body else ""))
        matched_names.append(name)
        count += 1

    documents = len(dedupe_preserve_order(matched_names))
    print(f"{count} match(es) in {documents} document(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
