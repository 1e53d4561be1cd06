from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from basic_ai_tools.core.settings import get_settings
from basic_ai_tools.main import create_app


def test_issue_token_returns_201_and_distinct_tokens(client: TestClient) -> None:
    first = client.post("/tokens")
    second = client.post("/tokens")

    assert first.status_code == 201, first.text
    assert second.status_code == 201, second.text
    assert first.json()["token"] != second.json()["token"]
    assert "X-Request-ID" in first.headers


def test_issue_token_reports_error_when_generation_gives_up(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("UNIQUE_TOKEN_ERROR_RESPONSE", "Token service busy.")
    get_settings.cache_clear()

    async def always_taken(self, field: str, value: str) -> bool:
        return True

    monkeypatch.setattr(
        "basic_ai_tools.tokens.service.SqlAlchemyUniquenessChecker.exists", always_taken
    )

    with TestClient(create_app()) as client:
        res = client.post("/tokens")

    assert res.status_code == 503
    assert res.json() == {"token": "error", "response": "Token service busy."}
