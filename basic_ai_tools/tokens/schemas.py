from __future__ import annotations

from pydantic import BaseModel, Field


class AccessTokenOut(BaseModel):
    token: str = Field(
        description="Newly issued URL-safe token (unique across stored tokens).",
        examples=["q0yJ8b2Zt2kzv1c3m7oR0xk3zGQ9bC1u8q0iE5rT1wA"],
    )


class UniqueTokenError(BaseModel):
    """Returned instead of a token when no unique candidate was found."""

    token: str = Field(default="error", examples=["error"])
    response: str = Field(description="Human-readable error message for the caller.")
