from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from notes_index.config import env_int, env_str, load_env
from notes_index.utils import summarize_text


logger = logging.getLogger(__name__)

DEFAULT_SUMMARY_TEMPLATE = (
    "Summarize the following study note in 1-2 sentences without adding new facts:\n\n{text}"
)


@dataclass(frozen=True)
class LlmConfig:
    api_url: str
    api_key: Optional[str] = None
    model: Optional[str] = None
    timeout_s: int = 30
    summary_template: str = DEFAULT_SUMMARY_TEMPLATE


def _extract_text(data: object) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    for key in ("summary", "text", "output"):
        if key in data and isinstance(data[key], str):
            return data[key].strip()
    if "choices" in data and data["choices"]:
        choice = data["choices"][0]
        if isinstance(choice, dict):
            if isinstance(choice.get("text"), str):
                return choice["text"].strip()
            message = choice.get("message")
            if isinstance(message, str):
                return message.strip()
            if isinstance(message, dict) and isinstance(message.get("content"), str):
                return message["content"].strip()
    return None


class LlmSummarizer:
    def __init__(self, config: LlmConfig, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    def summarize(self, text: str) -> str:
        prompt = self.config.summary_template.format(text=text)
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        payload = {"prompt": prompt}
        if self.config.model:
            payload["model"] = self.config.model
        try:
            response = self.session.post(
                self.config.api_url, json=payload, headers=headers, timeout=self.config.timeout_s
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Summarizer request failed, using extractive summary: %s", exc)
            return summarize_text(text)
        summary = _extract_text(data)
        if not summary:
            logger.warning("Summarizer response had no usable text, using extractive summary")
            return summarize_text(text)
        return summary


def load_summarizer_from_env() -> Optional[LlmSummarizer]:
    load_env()
    api_url = env_str("LLM_API_URL")
    if not api_url:
        return None
    config = LlmConfig(
        api_url=api_url,
        api_key=env_str("LLM_API_KEY"),
        model=env_str("LLM_MODEL"),
        timeout_s=env_int("LLM_TIMEOUT_S", 30),
        summary_template=env_str("LLM_SUMMARY_TEMPLATE", DEFAULT_SUMMARY_TEMPLATE),
    )
    return LlmSummarizer(config)
