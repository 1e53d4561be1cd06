from __future__ import annotations

import re

from basic_ai_tools.core.llm.resilience import ResilientRequestWrapper
from basic_ai_tools.tools.prompts import (
    KEYWORDS_MAX_TOKENS,
    LANGUAGE_MAX_TOKENS,
    SUMMARY_MAX_TOKENS,
    build_keywords_messages,
    build_language_messages,
    build_summary_messages,
)

# Letters (ASCII and Latin-1 accented), commas and spaces.
_NON_KEYWORD_CHARS = re.compile(r"[^a-zA-ZÀ-ÿ, ]")


class LanguageTools:
    """Language detection, keyword extraction and summarization."""

    def __init__(self, *, wrapper: ResilientRequestWrapper):
        self._wrapper = wrapper

    async def get_language(self, text: str, default: str = "Portuguese") -> str:
        """Return the language of `text` as a single word, or "" if the model failed."""
        return await self._wrapper.chat(
            build_language_messages(text=text, default=default),
            temperature=0,
            max_tokens=LANGUAGE_MAX_TOKENS,
            operation="language",
            fallback="",
        )

    async def generate_keywords(self, text: str, language: str = "Brazilian Portuguese") -> str:
        """Comma-separated keywords for `text`, written in `language`."""
        keywords = await self._wrapper.chat(
            build_keywords_messages(text=text, language=language),
            temperature=0.5,
            max_tokens=KEYWORDS_MAX_TOKENS,
            operation="keywords",
            fallback="",
        )
        return _NON_KEYWORD_CHARS.sub("", keywords)

    async def summarize_text(self, text: str) -> str:
        return await self._wrapper.chat(
            build_summary_messages(text=text),
            temperature=0.5,
            max_tokens=SUMMARY_MAX_TOKENS,
            operation="summary",
        )
