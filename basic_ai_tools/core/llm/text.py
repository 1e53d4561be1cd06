from __future__ import annotations

import re

DEFAULT_EMBEDDING_MAX_CHARS = 500

_CONTROL_CHARS = re.compile(r"[\x00-\x1F\x7F]")
_WHITESPACE_RUN = re.compile(r"\s+")


def sanitize_embedding_input(text: str, max_length: int = DEFAULT_EMBEDDING_MAX_CHARS) -> str:
    """
    Clean text before it is sent to the embedding endpoint.

    Control characters are removed (newlines and tabs included), runs of whitespace
    collapse to a single space, and the result is cut to `max_length` characters.
    Leading and trailing whitespace never survives.
    """

    if not isinstance(text, str):
        raise TypeError(f"Embedding input must be a string, got {type(text).__name__}")
    if max_length < 1:
        raise ValueError("max_length must be at least 1")

    clean = _CONTROL_CHARS.sub("", text.strip())
    clean = _WHITESPACE_RUN.sub(" ", clean).strip()
    return clean[:max_length].rstrip()


def estimate_token_count(text: str) -> int:
    """Rough token estimate: one token per four bytes of UTF-8."""
    return len(text.encode("utf-8")) // 4
