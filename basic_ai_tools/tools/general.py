from __future__ import annotations

from collections.abc import Mapping, Sequence

from basic_ai_tools.core.llm import text as text_utils
from basic_ai_tools.core.llm.resilience import ResilientRequestWrapper
from basic_ai_tools.tokens.schemas import UniqueTokenError
from basic_ai_tools.tokens.service import (
    DEFAULT_ERROR_RESPONSE,
    DEFAULT_MAX_ATTEMPTS,
    UniquenessChecker,
    generate_unique_token,
)
from basic_ai_tools.tools.prompts import (
    CHAT_MAX_TOKENS,
    YES_NO_MAX_TOKENS,
    build_need_to_summarize_messages,
)


class GeneralTools:
    """General-purpose helpers: free-form queries, embeddings and tokens."""

    def __init__(self, *, wrapper: ResilientRequestWrapper):
        self._wrapper = wrapper

    @staticmethod
    def estimate_token_count(text: str) -> int:
        return text_utils.estimate_token_count(text)

    @staticmethod
    def sanitize_embedding_input(
        text: str, max_length: int = text_utils.DEFAULT_EMBEDDING_MAX_CHARS
    ) -> str:
        return text_utils.sanitize_embedding_input(text, max_length)

    async def need_to_summarize(self, *, question: str, summary: str) -> bool:
        """
        Ask the model whether `question` is general enough to be answered from `summary`.

        Any answer that does not contain "yes" is False, and so is a failed call.
        """

        answer = await self._wrapper.chat(
            build_need_to_summarize_messages(question=question, summary=summary),
            temperature=0,
            max_tokens=YES_NO_MAX_TOKENS,
            operation="need_to_summarize",
            fallback="",
        )
        return "yes" in answer.lower()

    async def ai_query(self, messages: Sequence[Mapping[str, str]]) -> str:
        """Free-form chat; returns the model answer or the fallback message."""
        return await self._wrapper.chat(
            messages, temperature=0.2, max_tokens=CHAT_MAX_TOKENS, operation="query"
        )

    async def generate_embedding(self, text: str) -> str:
        return await self._wrapper.embedding(text)

    async def generate_unique_token(
        self,
        *,
        checker: UniquenessChecker,
        field: str = "token",
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        error_response: str = DEFAULT_ERROR_RESPONSE,
    ) -> str | UniqueTokenError:
        return await generate_unique_token(
            checker=checker,
            field=field,
            max_attempts=max_attempts,
            error_response=error_response,
        )
