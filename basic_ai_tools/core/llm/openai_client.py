from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

import httpx

T = TypeVar("T")


class ErrorKind(str, Enum):
    """How a failed call should be treated by the retry loop."""

    TRANSIENT = "transient"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class LLMResult(Generic[T]):
    """Value-or-error returned by every client call; clients never raise."""

    value: T | None = None
    error_kind: ErrorKind | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, value: T) -> LLMResult[T]:
        return cls(value=value)

    @classmethod
    def transient(cls, error: str) -> LLMResult[T]:
        return cls(error_kind=ErrorKind.TRANSIENT, error=error)

    @classmethod
    def unexpected(cls, error: str) -> LLMResult[T]:
        return cls(error_kind=ErrorKind.UNEXPECTED, error=error)


@dataclass(frozen=True)
class OpenAIConfig:
    api_key: str
    base_url: str
    chat_model: str
    embedding_model: str
    timeout_seconds: float


class OpenAIClient:
    """
    Minimal OpenAI API client for chat completions and embeddings.

    Design notes:
    - No logging in this module; the request wrapper logs failures by operation.
    - Stateless requests: a new HTTP client per call, no pooling.
    - Every failure is classified instead of raised. Network errors and non-200
      responses are transient (rate limits, timeouts and auth errors alike); a
      response we cannot decode is unexpected.
    """

    def __init__(
        self, *, config: OpenAIConfig, transport: httpx.AsyncBaseTransport | None = None
    ):
        self._config = config
        self._transport = transport

    async def complete_chat(
        self, *, messages: list[dict[str, str]], temperature: float, max_tokens: int
    ) -> LLMResult[str]:
        payload: dict[str, Any] = {
            "model": self._config.chat_model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        result = await self._post("/chat/completions", payload)
        if not result.ok:
            return LLMResult(error_kind=result.error_kind, error=result.error)

        try:
            content = result.value["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            return LLMResult.unexpected(f"Unexpected chat response structure: {exc!r}")
        if not isinstance(content, str):
            return LLMResult.unexpected("Chat response content is not a string")
        return LLMResult.success(content)

    async def create_embedding(self, *, text: str) -> LLMResult[list[float]]:
        payload: dict[str, Any] = {"model": self._config.embedding_model, "input": text}
        result = await self._post("/embeddings", payload)
        if not result.ok:
            return LLMResult(error_kind=result.error_kind, error=result.error)

        try:
            vector = result.value["data"][0]["embedding"]
        except (KeyError, IndexError, TypeError) as exc:
            return LLMResult.unexpected(f"Unexpected embedding response structure: {exc!r}")
        if not isinstance(vector, list) or not all(
            isinstance(v, (int, float)) and not isinstance(v, bool) for v in vector
        ):
            return LLMResult.unexpected("Embedding response is not a list of numbers")
        return LLMResult.success(vector)

    async def _post(self, path: str, payload: dict[str, Any]) -> LLMResult[dict[str, Any]]:
        url = f"{self._config.base_url.rstrip('/')}{path}"
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException:
            return LLMResult.transient("LLM request timed out")
        except httpx.HTTPError as exc:
            return LLMResult.transient(f"LLM request failed: {exc.__class__.__name__}")

        if resp.status_code != 200:
            return LLMResult.transient(f"LLM service returned status {resp.status_code}")

        try:
            data = resp.json()
        except ValueError:
            return LLMResult.unexpected("LLM response was not valid JSON")
        if not isinstance(data, dict):
            return LLMResult.unexpected("LLM response JSON must be an object")
        return LLMResult.success(data)
