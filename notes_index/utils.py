from __future__ import annotations

import re
from typing import Iterable, List


WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return WHITESPACE_RE.sub(" ", text).strip()


def summarize_text(text: str, max_sentences: int = 2, max_chars: int = 240) -> str:
    sentences = re.split(r"(?<=[.!?])\s+", collapse_whitespace(text))
    summary = " ".join(sentences[:max_sentences]).strip()
    if len(summary) > max_chars:
        summary = summary[: max_chars - 1].rstrip() + "…"
    return summary


def excerpt(text: str, max_chars: int = 240) -> str:
    flat = collapse_whitespace(text)
    if max_chars < 1:
        return ""
    if len(flat) <= max_chars:
        return flat
    return flat[: max_chars - 1].rstrip() + "…"


def dedupe_preserve_order(items: Iterable[str]) -> List[str]:
    seen = set()
    ordered = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        ordered.append(item)
    return ordered
