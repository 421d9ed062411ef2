"""Pytest configuration and fixtures."""

import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# Set test environment variables before importing application modules
os.environ["GOOGLE_GENAI_USE_VERTEXAI"] = "FALSE"
os.environ["GOOGLE_API_KEY"] = "test-api-key"
os.environ["EXA_API_KEY"] = "test-exa-key"
os.environ["SESSION_DATABASE_URL"] = ""
os.environ["ENVIRONMENT"] = "development"
os.environ["SCORING_ENABLED"] = "false"
os.environ["OTEL_ENABLED"] = "false"
os.environ["DEBUG"] = "true"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test see the environment as it is now."""
    from devils_advocate.config.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings():
    """Provide test settings."""
    from devils_advocate.config import Settings

    return Settings(
        google_api_key="test-api-key",
        exa_api_key="test-exa-key",
        session_database_url="",
        debug=True,
    )


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    from fastapi.testclient import TestClient

    from devils_advocate.api.app import create_app

    return TestClient(create_app())


@pytest.fixture
def mock_generate():
    """Patch agent lookup and invocation in the A2A router."""
    from devils_advocate.core import AgentResponse

    with (
        patch("devils_advocate.api.a2a.router.get_agent", return_value=MagicMock()),
        patch(
            "devils_advocate.api.a2a.router.generate",
            new=AsyncMock(return_value=AgentResponse(text="Your idea has flaws.")),
        ) as generate,
    ):
        yield generate
