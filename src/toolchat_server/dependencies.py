"""Dependency injection providers for FastAPI endpoints.

This module provides FastAPI dependency functions that are used across
multiple routers to inject common dependencies like settings and services.
"""

from functools import lru_cache

from fastapi import HTTPException, Request

from toolchat_server.config import ToolchatServerSettings
from toolchat_server.services import TurnOrchestrator


@lru_cache
def get_settings() -> ToolchatServerSettings:
    """Get the application settings instance.

    This function is cached so that the same settings instance is reused
    across all requests. Settings are loaded from environment variables
    with the TOOLCHAT_ prefix.

    Returns:
        ToolchatServerSettings: The application configuration settings.
    """
    return ToolchatServerSettings()


def get_orchestrator(request: Request) -> TurnOrchestrator:
    """Get the turn orchestrator from app state.

    The orchestrator is created during application startup and stored in
    app.state; its connections are opened lazily on the first turn.

    Args:
        request: The FastAPI request object.

    Returns:
        TurnOrchestrator: The process-wide orchestrator.

    Raises:
        HTTPException: If the orchestrator is not initialized (503 Service Unavailable).
    """
    if not hasattr(request.app.state, "orchestrator"):
        raise HTTPException(
            status_code=503,
            detail="Turn orchestrator not initialized",
        )
    return request.app.state.orchestrator
