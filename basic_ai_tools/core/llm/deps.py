from __future__ import annotations

from fastapi import Depends, HTTPException, status

from basic_ai_tools.core.llm.openai_client import OpenAIClient, OpenAIConfig
from basic_ai_tools.core.llm.resilience import LLMClient, ResilientRequestWrapper
from basic_ai_tools.core.settings import get_settings


def get_openai_client() -> OpenAIClient | None:
    """
    Dependency provider for OpenAIClient.

    Returns None when not configured so routes can return a safe 502 without
    raising during dependency resolution.
    """

    settings = get_settings()
    if not settings.openai_api_key:
        return None

    config = OpenAIConfig(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        chat_model=settings.openai_chat_model,
        embedding_model=settings.openai_embedding_model,
        timeout_seconds=float(settings.openai_timeout_seconds),
    )
    return OpenAIClient(config=config)


def get_request_wrapper(
    llm_client: LLMClient | None = Depends(get_openai_client),
) -> ResilientRequestWrapper:
    if llm_client is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail="LLM service unavailable"
        )

    settings = get_settings()
    return ResilientRequestWrapper(
        client=llm_client,
        max_attempts=int(settings.llm_max_attempts),
        fallback_message=settings.llm_fallback_message,
        embedding_max_chars=int(settings.embedding_max_input_chars),
    )
