"""Bounded-retry wrapper around the LLM client.

A call is attempted until it succeeds, fails with an unexpected error, or has
failed transiently `max_attempts` times. Chat calls degrade to a fixed fallback
string; embedding calls raise `EmbeddingGenerationError` so callers must decide.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Protocol, TypeVar

from basic_ai_tools.core.llm.openai_client import ErrorKind, LLMResult
from basic_ai_tools.core.llm.text import DEFAULT_EMBEDDING_MAX_CHARS, sanitize_embedding_input
from basic_ai_tools.core.metrics import llm_attempts_total

logger = logging.getLogger("basic_ai_tools.llm")

T = TypeVar("T")

MAX_ATTEMPTS = 5
FALLBACK_MESSAGE = "Something went wrong, contact support."


class LLMClient(Protocol):
    async def complete_chat(
        self, *, messages: list[dict[str, str]], temperature: float, max_tokens: int
    ) -> LLMResult[str]: ...

    async def create_embedding(self, *, text: str) -> LLMResult[list[float]]: ...


class EmbeddingGenerationError(Exception):
    """Raised when no embedding could be produced (retries exhausted or unexpected error)."""

    def __init__(self, message: str = "Server error in embedding generation"):
        super().__init__(message)
        self.message = message


class EmbeddingSanitizationError(Exception):
    """Raised when embedding input cannot be sanitized; no remote call is made."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    FALLBACK = "fallback"
    FAILURE = "failure"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Result of one wrapped invocation.

    FAILURE is only produced by a non-retryable error; FALLBACK only after every
    attempt failed transiently.
    """

    kind: OutcomeKind
    value: T | None = None
    error: str | None = None
    attempts: int = 0


async def run_with_retries(
    operation: str,
    call: Callable[[], Awaitable[LLMResult[T]]],
    *,
    max_attempts: int = MAX_ATTEMPTS,
) -> Outcome[T]:
    """Invoke `call` until success, an unexpected error, or `max_attempts` transient failures."""

    attempt = 0
    calls = 0
    while attempt < max_attempts:
        calls += 1
        try:
            result = await call()
        except Exception as exc:  # noqa: BLE001 - a raising client is a local fault, not a retry
            result = LLMResult.unexpected(f"{exc.__class__.__name__}: {exc}")

        if result.ok:
            llm_attempts_total.labels(operation=operation, result="success").inc()
            return Outcome(kind=OutcomeKind.SUCCESS, value=result.value, attempts=calls)

        error_kind = result.error_kind or ErrorKind.UNEXPECTED
        llm_attempts_total.labels(operation=operation, result=error_kind.value).inc()
        logger.error(
            "LLM %s request failed: %s",
            operation,
            result.error,
            extra={
                "operation": operation,
                "attempt": calls,
                "error_kind": error_kind.value,
                "error": result.error,
            },
        )

        if error_kind is not ErrorKind.TRANSIENT:
            return Outcome(kind=OutcomeKind.FAILURE, error=result.error, attempts=calls)
        attempt += 1

    return Outcome(kind=OutcomeKind.FALLBACK, attempts=calls)


CHAT_ROLES = frozenset({"system", "user", "assistant"})


def _chat_payload(messages: Sequence[Mapping[str, str]]) -> list[dict[str, str]]:
    if not messages:
        raise ValueError("messages must not be empty")
    payload = []
    for index, message in enumerate(messages):
        role = message.get("role") if isinstance(message, Mapping) else None
        content = message.get("content") if isinstance(message, Mapping) else None
        if role not in CHAT_ROLES or not isinstance(content, str):
            raise ValueError(f"message {index} must have a known role and string content")
        payload.append({"role": role, "content": content})
    return payload


def _is_numeric_vector(vector: object) -> bool:
    return isinstance(vector, list) and all(
        isinstance(v, (int, float)) and not isinstance(v, bool) for v in vector
    )


def serialize_embedding(vector: Sequence[float]) -> str:
    """Render a vector as a compact bracketed literal, e.g. `[0.1,-0.2,0.33]`."""
    return json.dumps(list(vector), separators=(",", ":"))


class ResilientRequestWrapper:
    """Chat and embedding calls with a bounded retry loop and typed fallback."""

    def __init__(
        self,
        *,
        client: LLMClient,
        max_attempts: int = MAX_ATTEMPTS,
        fallback_message: str = FALLBACK_MESSAGE,
        embedding_max_chars: int = DEFAULT_EMBEDDING_MAX_CHARS,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._client = client
        self._max_attempts = max_attempts
        self._fallback_message = fallback_message
        self._embedding_max_chars = embedding_max_chars

    @property
    def fallback_message(self) -> str:
        return self._fallback_message

    async def chat(
        self,
        messages: Sequence[Mapping[str, str]],
        *,
        temperature: float,
        max_tokens: int,
        operation: str = "chat",
        fallback: str | None = None,
    ) -> str:
        """
        Run a chat completion and return the trimmed answer.

        Never raises for remote or unexpected errors: the caller gets either the model
        output or `fallback` (defaults to the configured apology message). A malformed
        message list raises ValueError before any remote call.
        """

        payload = _chat_payload(messages)

        outcome = await run_with_retries(
            operation,
            lambda: self._client.complete_chat(
                messages=payload, temperature=temperature, max_tokens=max_tokens
            ),
            max_attempts=self._max_attempts,
        )
        if outcome.kind is OutcomeKind.SUCCESS and outcome.value is not None:
            return outcome.value.strip()
        return self._fallback_message if fallback is None else fallback

    async def embedding(self, text: str, *, max_length: int | None = None) -> str:
        """
        Sanitize `text`, create its embedding and return it as a bracketed literal.

        Raises EmbeddingSanitizationError before any remote call when the input is
        unusable, and EmbeddingGenerationError when no embedding could be produced.
        """

        try:
            sanitized = sanitize_embedding_input(
                text, self._embedding_max_chars if max_length is None else max_length
            )
        except (TypeError, ValueError) as exc:
            raise EmbeddingSanitizationError(
                f"Generate embedding error while sanitizing input: {exc}"
            ) from exc

        outcome = await run_with_retries(
            "embedding",
            lambda: self._client.create_embedding(text=sanitized),
            max_attempts=self._max_attempts,
        )
        if outcome.kind is not OutcomeKind.SUCCESS or outcome.value is None:
            raise EmbeddingGenerationError()
        if not _is_numeric_vector(outcome.value):
            # Not retried: the call itself succeeded, its payload is unusable.
            logger.error(
                "LLM embedding response is not a numeric vector",
                extra={"operation": "embedding", "error_kind": ErrorKind.UNEXPECTED.value},
            )
            raise EmbeddingGenerationError()
        return serialize_embedding(outcome.value)
