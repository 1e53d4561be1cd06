from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from basic_ai_tools.core.llm.openai_client import ErrorKind, OpenAIClient, OpenAIConfig

CONFIG = OpenAIConfig(
    api_key="sk-test",
    base_url="https://llm.example/v1/",
    chat_model="gpt-4o-mini",
    embedding_model="text-embedding-ada-002",
    timeout_seconds=5.0,
)


def _client(handler) -> OpenAIClient:
    return OpenAIClient(config=CONFIG, transport=httpx.MockTransport(handler))


def _chat(client: OpenAIClient):
    return asyncio.run(
        client.complete_chat(
            messages=[{"role": "user", "content": "Hi"}], temperature=0, max_tokens=3
        )
    )


def test_chat_sends_expected_request_and_returns_content() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"content": " English "}}]})

    result = _chat(_client(handler))

    assert result.ok
    # Trimming is the wrapper's job; the client returns content untouched.
    assert result.value == " English "

    request = seen[0]
    assert str(request.url) == "https://llm.example/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"
    body = json.loads(request.content)
    assert body == {
        "model": "gpt-4o-mini",
        "messages": [{"role": "user", "content": "Hi"}],
        "temperature": 0,
        "max_tokens": 3,
    }


def test_embedding_returns_vector() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert str(request.url) == "https://llm.example/v1/embeddings"
        assert body == {"model": "text-embedding-ada-002", "input": "hello"}
        return httpx.Response(200, json={"data": [{"embedding": [0.1, -0.2]}]})

    result = asyncio.run(_client(handler).create_embedding(text="hello"))
    assert result.ok
    assert result.value == [0.1, -0.2]


@pytest.mark.parametrize("status_code", [400, 401, 429, 500, 503])
def test_non_200_status_is_transient(status_code: int) -> None:
    result = _chat(_client(lambda request: httpx.Response(status_code, json={"error": {}})))
    assert not result.ok
    assert result.error_kind is ErrorKind.TRANSIENT
    assert str(status_code) in (result.error or "")


def test_network_errors_are_transient() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    def time_out(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    refused = _chat(_client(refuse))
    timed_out = asyncio.run(_client(time_out).create_embedding(text="x"))

    assert refused.error_kind is ErrorKind.TRANSIENT
    assert timed_out.error_kind is ErrorKind.TRANSIENT
    assert timed_out.error == "LLM request timed out"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, content=b"not json"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json={"choices": [{"message": {"content": None}}]}),
    ],
)
def test_undecodable_chat_payload_is_unexpected(response: httpx.Response) -> None:
    result = _chat(_client(lambda request: response))
    assert result.error_kind is ErrorKind.UNEXPECTED


def test_undecodable_embedding_payload_is_unexpected() -> None:
    result = asyncio.run(
        _client(lambda request: httpx.Response(200, json={"data": []})).create_embedding(text="x")
    )
    assert result.error_kind is ErrorKind.UNEXPECTED


@pytest.mark.parametrize("embedding", [["a", None], [0.1, "0.2"], [True, False]])
def test_non_numeric_embedding_is_unexpected(embedding) -> None:
    result = asyncio.run(
        _client(
            lambda request: httpx.Response(200, json={"data": [{"embedding": embedding}]})
        ).create_embedding(text="x")
    )
    assert result.error_kind is ErrorKind.UNEXPECTED
