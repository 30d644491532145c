from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


def load_env() -> None:
    # existing environment variables win over .env entries
    load_dotenv(override=False)


def env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value


def env_int(name: str, default: int) -> int:
    value = env_str(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


@dataclass(frozen=True)
class AppSettings:
    pattern: str = "*.md"
    marker: str = "#"
    excerpt_chars: int = 240
    log_level: str = "WARNING"


def load_settings_from_env() -> AppSettings:
    load_env()
    return AppSettings(
        pattern=env_str("NOTES_INDEX_PATTERN", "*.md"),
        marker=env_str("NOTES_INDEX_MARKER", "#"),
        excerpt_chars=env_int("NOTES_INDEX_EXCERPT_CHARS", 240),
        log_level=env_str("NOTES_INDEX_LOG_LEVEL", "WARNING").upper(),
    )
