"""Pydantic models for API request and response schemas.

This package contains all Pydantic models used for validating and
serializing API requests and responses across all endpoints.
"""

from toolchat_server.models.chat import (
    ChatMessage,
    ChatTurnRequest,
    ChatTurnResponse,
    ErrorResponse,
)
from toolchat_server.models.health import HealthResponse
from toolchat_server.models.tools import ToolListResponse, ToolResponse

__all__ = [
    "ChatMessage",
    "ChatTurnRequest",
    "ChatTurnResponse",
    "ErrorResponse",
    "HealthResponse",
    "ToolListResponse",
    "ToolResponse",
]
