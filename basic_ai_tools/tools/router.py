from __future__ import annotations

from fastapi import APIRouter, Depends

from basic_ai_tools.core.llm.deps import get_request_wrapper
from basic_ai_tools.core.llm.resilience import ResilientRequestWrapper
from basic_ai_tools.core.llm.text import estimate_token_count
from basic_ai_tools.tools.general import GeneralTools
from basic_ai_tools.tools.language import LanguageTools
from basic_ai_tools.tools.schemas import (
    EmbeddingOut,
    KeywordsIn,
    KeywordsOut,
    LanguageIn,
    LanguageOut,
    NeedToSummarizeIn,
    NeedToSummarizeOut,
    QueryIn,
    QueryOut,
    SummaryOut,
    TextIn,
    TokenEstimateOut,
)

router = APIRouter(prefix="/ai", tags=["ai"])


def get_general_tools(
    wrapper: ResilientRequestWrapper = Depends(get_request_wrapper),
) -> GeneralTools:
    return GeneralTools(wrapper=wrapper)


def get_language_tools(
    wrapper: ResilientRequestWrapper = Depends(get_request_wrapper),
) -> LanguageTools:
    return LanguageTools(wrapper=wrapper)


@router.post("/query", response_model=QueryOut)
async def query(payload: QueryIn, tools: GeneralTools = Depends(get_general_tools)) -> QueryOut:
    """
    Free-form chat completion.

    Always answers 200: when the model keeps failing the text is the fallback message.
    """

    text = await tools.ai_query([m.model_dump() for m in payload.messages])
    return QueryOut(text=text)


@router.post("/embeddings", response_model=EmbeddingOut)
async def create_embedding(
    payload: TextIn, tools: GeneralTools = Depends(get_general_tools)
) -> EmbeddingOut:
    # EmbeddingGenerationError / EmbeddingSanitizationError are mapped by the app's handlers.
    embedding = await tools.generate_embedding(payload.text)
    return EmbeddingOut(embedding=embedding)


@router.post("/language", response_model=LanguageOut)
async def detect_language(
    payload: LanguageIn, tools: LanguageTools = Depends(get_language_tools)
) -> LanguageOut:
    language = await tools.get_language(payload.text, default=payload.default)
    return LanguageOut(language=language)


@router.post("/keywords", response_model=KeywordsOut)
async def keywords(
    payload: KeywordsIn, tools: LanguageTools = Depends(get_language_tools)
) -> KeywordsOut:
    result = await tools.generate_keywords(payload.text, language=payload.language)
    return KeywordsOut(keywords=result)


@router.post("/summaries", response_model=SummaryOut)
async def summarize(
    payload: TextIn, tools: LanguageTools = Depends(get_language_tools)
) -> SummaryOut:
    return SummaryOut(summary=await tools.summarize_text(payload.text))


@router.post("/need-to-summarize", response_model=NeedToSummarizeOut)
async def need_to_summarize(
    payload: NeedToSummarizeIn, tools: GeneralTools = Depends(get_general_tools)
) -> NeedToSummarizeOut:
    decision = await tools.need_to_summarize(question=payload.question, summary=payload.summary)
    return NeedToSummarizeOut(need_to_summarize=decision)


@router.post("/token-estimate", response_model=TokenEstimateOut)
async def token_estimate(payload: TextIn) -> TokenEstimateOut:
    """Local estimate; does not call the LLM and works without an API key."""
    return TokenEstimateOut(tokens=estimate_token_count(payload.text))
