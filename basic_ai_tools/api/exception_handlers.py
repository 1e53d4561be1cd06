from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from basic_ai_tools.core.llm.resilience import (
    EmbeddingGenerationError,
    EmbeddingSanitizationError,
)
from basic_ai_tools.domain.exceptions import BusinessValidationError

logger = logging.getLogger("basic_ai_tools.errors")


def _request_metadata(request: Request, status_code: int, error: str) -> dict[str, object]:
    # Request bodies and query values are never logged.
    return {
        "request_id": getattr(request.state, "request_id", None)
        or request.headers.get("X-Request-ID"),
        "http_method": request.method,
        "request_path": request.url.path,
        "status_code": status_code,
        "error": error,
    }


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(BusinessValidationError)
    async def handle_business_validation_error(
        request: Request,
        exc: BusinessValidationError,
    ) -> JSONResponse:
        logger.info(
            "Business validation failed",
            extra=_request_metadata(request, 400, "business_validation"),
        )
        return JSONResponse(status_code=400, content={"detail": exc.message})

    @app.exception_handler(EmbeddingSanitizationError)
    async def handle_embedding_sanitization_error(
        request: Request,
        exc: EmbeddingSanitizationError,
    ) -> JSONResponse:
        logger.info(
            "Embedding input rejected",
            extra=_request_metadata(request, 400, "embedding_sanitization"),
        )
        return JSONResponse(status_code=400, content={"detail": exc.message})

    @app.exception_handler(EmbeddingGenerationError)
    async def handle_embedding_generation_error(
        request: Request,
        exc: EmbeddingGenerationError,
    ) -> JSONResponse:
        logger.info(
            "Embedding generation failed",
            extra=_request_metadata(request, 502, "embedding_generation"),
        )
        return JSONResponse(status_code=502, content={"detail": "LLM service failed"})
