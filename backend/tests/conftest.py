"""
Pytest configuration and fixtures for Sitecraft backend tests.

Tests run against in-memory storage with the AI provider mocked. Postgres
repository tests run only when TEST_DATABASE_URL points at a migrated database.
"""

from __future__ import annotations

import os

# Set test environment variables before importing config
os.environ["TESTING"] = "true"
os.environ["DATABASE_URL"] = ""
os.environ["AI_PROVIDER"] = "anthropic"
os.environ.setdefault("ANTHROPIC_API_KEY", "test-anthropic-key")
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")

from unittest.mock import AsyncMock, patch  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from backend.main import app  # noqa: E402
from backend.repos import get_ai_content_repo, get_project_repo  # noqa: E402
from backend.services.content_generator import content_generator  # noqa: E402


@pytest.fixture(autouse=True)
def clean_memory_repos():
    """Every test starts with empty in-memory storage."""
    get_project_repo().clear()
    get_ai_content_repo().clear()
    yield
    get_project_repo().clear()
    get_ai_content_repo().clear()


@pytest_asyncio.fixture(loop_scope="session")
async def async_client():
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def mock_complete():
    """Replace the upstream model call. Set .return_value or .side_effect per test."""
    with patch.object(content_generator.provider, "complete", new_callable=AsyncMock) as mock:
        yield mock


@pytest.fixture
def project_repo():
    return get_project_repo()
