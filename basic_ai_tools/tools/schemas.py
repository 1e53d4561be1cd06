from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

ChatRole = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    role: ChatRole
    content: str = Field(min_length=1)


class QueryIn(BaseModel):
    messages: list[ChatMessage] = Field(
        min_length=1,
        description="Ordered conversation sent to the model. Must not be empty.",
        examples=[[{"role": "user", "content": "What is a vector database?"}]],
    )


class QueryOut(BaseModel):
    text: str = Field(
        description="Model answer, or the configured fallback message if the model failed."
    )


class TextIn(BaseModel):
    text: str = Field(min_length=1)


class EmbeddingOut(BaseModel):
    embedding: str = Field(
        description="Embedding vector as a bracketed, comma-joined literal.",
        examples=["[0.1,-0.2,0.33]"],
    )


class LanguageIn(TextIn):
    default: str = Field(
        default="Portuguese",
        min_length=1,
        max_length=50,
        description="Language the model should answer with when unsure.",
    )


class LanguageOut(BaseModel):
    language: str = Field(description="Detected language, or an empty string on failure.")


class KeywordsIn(TextIn):
    language: str = Field(default="Brazilian Portuguese", min_length=1, max_length=50)


class KeywordsOut(BaseModel):
    keywords: str = Field(description="Comma-separated keywords; empty on failure.")


class SummaryOut(BaseModel):
    summary: str


class NeedToSummarizeIn(BaseModel):
    question: str = Field(min_length=1)
    summary: str = Field(min_length=1)


class NeedToSummarizeOut(BaseModel):
    need_to_summarize: bool


class TokenEstimateOut(BaseModel):
    tokens: int = Field(ge=0)
