from __future__ import annotations

import logging
import secrets
from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from basic_ai_tools.domain.exceptions import BusinessValidationError
from basic_ai_tools.tokens.models import AccessToken
from basic_ai_tools.tokens.schemas import UniqueTokenError

logger = logging.getLogger("basic_ai_tools.tokens")

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_ERROR_RESPONSE = "AI service error, contact support."


class UniquenessChecker(Protocol):
    async def exists(self, field: str, value: str) -> bool: ...


class SqlAlchemyUniquenessChecker:
    """Checks whether `model.<field> == value` is already stored."""

    def __init__(self, *, session: AsyncSession, model: type[Any]):
        self._session = session
        self._model = model

    async def exists(self, field: str, value: str) -> bool:
        column = getattr(self._model, field, None)
        if column is None:
            raise ValueError(f"{self._model.__name__} has no column named {field!r}")
        stmt = select(column).where(column == value).limit(1)
        row = (await self._session.execute(stmt)).first()
        return row is not None


def _new_token() -> str:
    # 32 random bytes, URL-safe base64 without padding.
    return secrets.token_urlsafe(32)


async def generate_unique_token(
    *,
    checker: UniquenessChecker,
    field: str = "token",
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    error_response: str = DEFAULT_ERROR_RESPONSE,
) -> str | UniqueTokenError:
    """
    Return a token that `checker` does not know yet.

    Gives up with a UniqueTokenError after `max_attempts` taken candidates instead of
    looping forever. A failing store is logged and yields an empty string.
    """

    try:
        for _ in range(max_attempts):
            candidate = _new_token()
            if not await checker.exists(field, candidate):
                return candidate
    except Exception:  # noqa: BLE001 - store failures must not escape to the caller
        logger.exception("Generate unique token failed")
        return ""

    logger.warning(
        "Unique token generation gave up",
        extra={"operation": "unique_token", "attempt": max_attempts},
    )
    return UniqueTokenError(response=error_response)


async def issue_access_token(
    *,
    session: AsyncSession,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    error_response: str = DEFAULT_ERROR_RESPONSE,
) -> AccessToken | UniqueTokenError:
    """Generate a unique token and persist it as an AccessToken."""

    checker = SqlAlchemyUniquenessChecker(session=session, model=AccessToken)
    result = await generate_unique_token(
        checker=checker, max_attempts=max_attempts, error_response=error_response
    )
    if isinstance(result, UniqueTokenError):
        return result
    if not result:
        return UniqueTokenError(response=error_response)

    access_token = AccessToken(token=result)
    session.add(access_token)
    try:
        await session.commit()
    except IntegrityError:
        # A concurrent insert took the same token between the check and the commit.
        await session.rollback()
        raise BusinessValidationError("Access token could not be stored, try again.") from None

    await session.refresh(access_token)
    return access_token
