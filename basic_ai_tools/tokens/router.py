from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from basic_ai_tools.core.db import get_session
from basic_ai_tools.core.settings import get_settings
from basic_ai_tools.tokens.schemas import AccessTokenOut, UniqueTokenError
from basic_ai_tools.tokens.service import issue_access_token

router = APIRouter(prefix="/tokens", tags=["tokens"])
logger = logging.getLogger("basic_ai_tools.tokens")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=AccessTokenOut,
    responses={503: {"model": UniqueTokenError}},
)
async def create_access_token(
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> AccessTokenOut | JSONResponse:
    """Issue and store a new unique access token. Token values are never logged."""

    settings = get_settings()
    result = await issue_access_token(
        session=session,
        max_attempts=int(settings.unique_token_max_attempts),
        error_response=settings.unique_token_error_response,
    )
    request_id = getattr(request.state, "request_id", None)

    if isinstance(result, UniqueTokenError):
        logger.info("Access token not issued", extra={"request_id": request_id})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=result.model_dump()
        )

    logger.info("Access token issued", extra={"request_id": request_id})
    return AccessTokenOut(token=result.token)
