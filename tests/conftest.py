from __future__ import annotations

import pytest

# Importing the app configures logging once, before any test installs caplog handlers.
from basic_ai_tools.main import create_app


@pytest.fixture()
def database_url(tmp_path) -> str:
    db_file = tmp_path / "test.sqlite3"
    return f"sqlite+aiosqlite:///{db_file}"


@pytest.fixture(autouse=True)
def _set_test_environment(database_url: str, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DATABASE_URL", database_url)
    # Never talk to a real provider from tests.
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from basic_ai_tools.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    app = create_app()
    with TestClient(app) as c:
        yield c