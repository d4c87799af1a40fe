from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tests._helpers import FakeLLMClient, make_settings

_RELAY_ENV_VARS = (
    "GROQ_API_KEY",
    "GROQ_MODEL",
    "GROQ_BASE_URL",
    "GROQ_TIMEOUT_SECONDS",
    "MAX_TOKENS",
    "TEMPERATURE",
    "HOST",
    "PORT",
    "MAX_BODY_BYTES",
)


@pytest.fixture(autouse=True)
def _clean_relay_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _RELAY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from prompt_relay.core.settings import get_settings

    get_settings.cache_clear()


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture
def client():
    """Server app without an upstream credential."""
    from prompt_relay.main import create_app

    app = create_app(make_settings())
    with TestClient(app) as c:
        yield c


@pytest.fixture
def relay_client(fake_llm: FakeLLMClient):
    """Server app with the upstream client replaced by `fake_llm`."""
    from prompt_relay.core.llm.deps import get_groq_client
    from prompt_relay.main import create_app

    app = create_app(make_settings(groq_api_key="test-key"))
    app.dependency_overrides[get_groq_client] = lambda: fake_llm
    with TestClient(app) as c:
        yield c
