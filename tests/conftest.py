"""Pytest configuration and shared fixtures for toolchat-server tests.

This module provides common fixtures used across all test modules,
including test settings, app creation and async client setup.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from toolchat_server import create_app
from toolchat_server.config import ToolchatServerSettings


@pytest.fixture
def test_settings():
    """Create test settings with fake credentials.

    Returns:
        ToolchatServerSettings: Settings instance configured for testing.
    """
    return ToolchatServerSettings(
        host="127.0.0.1",
        port=8000,
        ollama_host="http://localhost:11434",
        ollama_api_key="test-ollama-key",
        model="llama3.2:latest",
        tool_host_command="node",
        tool_host_args=["mcp-server.js"],
        tool_host_token="test-token-0123456789",
        tool_host_key="test-key",
        log_level="DEBUG",
        cors_origins=["*"],
    )


@pytest.fixture
def test_app(test_settings):
    """Create a FastAPI test application instance.

    Args:
        test_settings: Test settings fixture.

    Returns:
        FastAPI: Configured test application.
    """
    return create_app(settings=test_settings)


@pytest_asyncio.fixture
async def async_client(test_app):
    """Create an async HTTP client for testing FastAPI endpoints.

    Args:
        test_app: Test application fixture.

    Yields:
        AsyncClient: Async HTTP client for making test requests.
    """
    # Trigger the lifespan startup manually for tests
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
