"""FastAPI routers for API endpoints.

This package contains all route handlers organized by resource type.
Each router module defines endpoints for a specific domain (health, chat, tools).
"""

from toolchat_server.routers import chat, health, tools

__all__ = [
    "chat",
    "health",
    "tools",
]
