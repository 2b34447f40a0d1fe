"""Pytest configuration for integration tests.

This module provides integration-test-specific fixtures that replace the
completion client and the tool host with mocks, so API tests exercise the
full app without a model service or an MCP child process.
"""

from unittest.mock import AsyncMock, patch

import pytest

from toolchat_server.tools import ContentItem, ContentResult, Tool


@pytest.fixture(autouse=True)
def mock_completion_client():
    """Mock CompletionClient for all integration tests.

    The class is patched where the orchestrator builds it, so the first turn
    of every test gets this mock instead of a real client.
    """
    with patch("toolchat_server.services.orchestrator.CompletionClient") as mock_client_class:
        mock_instance = AsyncMock()
        mock_instance.complete.return_value = "Hello! How can I help you today?"
        mock_client_class.return_value = mock_instance

        yield mock_instance


@pytest.fixture(autouse=True)
def mock_tool_host():
    """Mock ToolHostSession for all integration tests."""
    with patch("toolchat_server.services.orchestrator.ToolHostSession") as mock_host_class:
        mock_instance = AsyncMock()
        mock_instance.connected = True
        mock_instance.list_tools.return_value = [
            Tool(
                name="create-contact",
                description="Create a contact",
                input_schema={
                    "type": "object",
                    "properties": {
                        "name": {"type": "string"},
                        "email": {"type": "string"},
                    },
                    "required": ["name"],
                },
            ),
            Tool(name="list-contacts", description="List contacts"),
        ]
        mock_instance.invoke.return_value = ContentResult(
            items=[ContentItem(type="text", text='{"id":"42","name":"Jane"}')]
        )
        mock_host_class.return_value = mock_instance

        yield mock_instance
