from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from basic_ai_tools.api.exception_handlers import register_exception_handlers
from basic_ai_tools.api.schemas import HealthOut
from basic_ai_tools.core.db import close_db, create_schema, init_db
from basic_ai_tools.core.logging import setup_logging
from basic_ai_tools.core.metrics import PrometheusMetricsMiddleware, metrics_router
from basic_ai_tools.core.middleware.http_logging import HttpLoggingMiddleware
from basic_ai_tools.core.settings import get_settings
from basic_ai_tools.tokens.router import router as tokens_router
from basic_ai_tools.tools.router import router as tools_router

setup_logging()


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Defer settings/env access until application startup so importing the module
        # does not require DATABASE_URL.
        settings = get_settings()
        init_db(app=app, database_url=str(settings.database_url))
        await create_schema(engine=app.state.db_engine)
        yield
        await close_db(app=app)

    app = FastAPI(
        title="Basic AI Tools API",
        description=(
            "Helpers around an OpenAI-compatible API for web applications.\n\n"
            "- Chat calls retry transient failures a bounded number of times and degrade to a "
            "fixed fallback message.\n"
            "- Embedding calls sanitize their input once and fail with 502 when no embedding "
            "could be produced.\n"
            "- Prompts and model outputs are never logged."
        ),
        lifespan=lifespan,
        openapi_tags=[
            {"name": "health", "description": "Basic uptime check."},
            {
                "name": "ai",
                "description": "Chat, embedding, language, keyword and summary helpers.",
            },
            {"name": "tokens", "description": "Issue unique access tokens."},
            {"name": "metrics", "description": "Prometheus-compatible metrics endpoint."},
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description="Does not check the LLM provider or the database.",
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(tools_router)
    app.include_router(tokens_router)
    return app


app = create_app()
