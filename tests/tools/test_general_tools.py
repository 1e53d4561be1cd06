from __future__ import annotations

import asyncio

import pytest

from basic_ai_tools.core.llm.openai_client import LLMResult
from basic_ai_tools.core.llm.resilience import (
    FALLBACK_MESSAGE,
    EmbeddingGenerationError,
    ResilientRequestWrapper,
)
from basic_ai_tools.tokens.schemas import UniqueTokenError
from basic_ai_tools.tools.general import GeneralTools
from tests._fakes import ScriptedLLMClient, transient


def _tools(client: ScriptedLLMClient) -> GeneralTools:
    return GeneralTools(wrapper=ResilientRequestWrapper(client=client))


@pytest.mark.parametrize(
    ("answer", "expected"),
    [("Yes", True), (" yes.", True), ("YES", True), ("No", False), ("", False)],
)
def test_need_to_summarize_parses_yes_no(answer: str, expected: bool) -> None:
    client = ScriptedLLMClient(chat=[LLMResult.success(answer)])

    result = asyncio.run(_tools(client).need_to_summarize(question="Q?", summary="S."))

    assert result is expected
    call = client.chat_calls[0]
    assert call["temperature"] == 0
    assert call["max_tokens"] == 2
    assert call["messages"][1]["content"] == 'Summary: "S." Question: "Q?".'


def test_need_to_summarize_is_false_when_model_keeps_failing() -> None:
    client = ScriptedLLMClient(chat=[transient()])
    assert asyncio.run(_tools(client).need_to_summarize(question="Q", summary="S")) is False


def test_ai_query_uses_general_chat_budget() -> None:
    client = ScriptedLLMClient(chat=[LLMResult.success(" An answer ")])
    messages = [{"role": "user", "content": "Explain embeddings"}]

    assert asyncio.run(_tools(client).ai_query(messages)) == "An answer"
    assert client.chat_calls[0]["temperature"] == 0.2
    assert client.chat_calls[0]["max_tokens"] == 1000


def test_ai_query_returns_fallback_message() -> None:
    client = ScriptedLLMClient(chat=[transient()])
    result = asyncio.run(_tools(client).ai_query([{"role": "user", "content": "x"}]))
    assert result == FALLBACK_MESSAGE


def test_generate_embedding_delegates_to_wrapper() -> None:
    client = ScriptedLLMClient(embedding=[LLMResult.success([0.5, 0.25])])
    assert asyncio.run(_tools(client).generate_embedding(" hi ")) == "[0.5,0.25]"

    failing = ScriptedLLMClient(embedding=[transient()])
    with pytest.raises(EmbeddingGenerationError):
        asyncio.run(_tools(failing).generate_embedding("hi"))


def test_static_helpers() -> None:
    assert GeneralTools.estimate_token_count("abcdefgh") == 2
    assert GeneralTools.sanitize_embedding_input("  a\x01b   c  ") == "ab c"


def test_generate_unique_token_via_tools() -> None:
    class _AlwaysTaken:
        async def exists(self, field: str, value: str) -> bool:
            return True

    result = asyncio.run(
        _tools(ScriptedLLMClient()).generate_unique_token(
            checker=_AlwaysTaken(), error_response="No token."
        )
    )
    assert result == UniqueTokenError(token="error", response="No token.")


def test_need_to_summarize_ignores_fallback_text_containing_yes() -> None:
    client = ScriptedLLMClient(chat=[transient()])
    tools = GeneralTools(
        wrapper=ResilientRequestWrapper(client=client, fallback_message="Yes, something broke")
    )

    assert asyncio.run(tools.need_to_summarize(question="Q", summary="S")) is False
    assert len(client.chat_calls) == 5
