"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any application import so settings are
built from a known state (no .env file, no real AI credential).
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("OFFICIAL_EMAIL", "tester@example.com")
os.environ.setdefault("LLM_PROVIDER", "gemini")
os.environ.setdefault("LLM_MODEL", "gemini-2.5-flash")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.pop("GEMINI_API_KEY", None)
os.environ.pop("LLM_API_KEY", None)

import pytest
from fastapi.testclient import TestClient

from bfhl_api.api.routes.bfhl import get_dispatcher
from bfhl_api.core import rate_limit
from bfhl_api.main import app
from bfhl_api.services.bfhl_service import BfhlDispatcher
from tests.fakes import FakeLLMClient

OFFICIAL_EMAIL = os.environ["OFFICIAL_EMAIL"]


@pytest.fixture(autouse=True)
def fresh_rate_limiter():
    """Give every test an empty process-wide limiter."""
    rate_limit.set_rate_limiter(None)
    yield
    rate_limit.set_rate_limiter(None)


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client (server errors rendered, not raised)."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def fake_llm():
    """Route AI requests to a FakeLLMClient for the duration of a test."""
    llm = FakeLLMClient()
    app.dependency_overrides[get_dispatcher] = lambda: BfhlDispatcher(llm_provider=lambda: llm)
    yield llm
    app.dependency_overrides.pop(get_dispatcher, None)
