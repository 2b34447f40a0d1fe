"""toolchat-server: FastAPI server that brokers chat turns with MCP tools.

This package provides a REST API that sends each user message to a language
model and, when the model asks for it, runs one tool on an MCP tool host.
"""

__version__ = "0.1.0"

from toolchat_server.app import create_app  # noqa: E402

__all__ = ["create_app", "__version__"]
