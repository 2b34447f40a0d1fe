"""FastAPI application factory and lifespan management.

This module contains the create_app() factory function that creates and configures
the FastAPI application instance, including lifespan management for startup/shutdown
and router registration.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from toolchat_server import __version__
from toolchat_server.config import ToolchatServerSettings
from toolchat_server.errors import ToolchatError
from toolchat_server.routers import chat, health, tools
from toolchat_server.services import TurnOrchestrator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for FastAPI application.

    The turn orchestrator is created once at startup and stored in app.state.
    Its completion client and tool host connection are opened on the first
    turn, or here when eager_init is enabled.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded while the app is running.
    """
    settings: ToolchatServerSettings = app.state.settings
    app.state.orchestrator = TurnOrchestrator(settings=settings)
    logger.info("Initialized turn orchestrator")

    if settings.eager_init:
        try:
            catalog = await app.state.orchestrator.ensure_ready()
            logger.info(f"Connected at startup with {len(catalog)} tools")
        except ToolchatError as e:
            logger.warning(f"Startup initialization failed, will retry on first turn: {e}")
        else:
            if not await app.state.orchestrator.check_completion_service():
                logger.warning(
                    f"Completion service at {settings.ollama_host} is not reachable"
                )

    yield

    await app.state.orchestrator.close()
    logger.info("Turn orchestrator closed")


def create_app(settings: ToolchatServerSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a FastAPI instance with all routers,
    middleware, and configuration applied. It can accept an optional
    settings object for testing or explicit configuration.

    Args:
        settings: Optional ToolchatServerSettings instance. If not provided,
                  settings will be loaded from environment variables.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        from toolchat_server.dependencies import get_settings

        settings = get_settings()

    app = FastAPI(
        title="toolchat-server",
        description="Chat server that lets a language model call MCP tools",
        version=__version__,
        lifespan=lifespan,
    )

    # Store settings in app.state for lifespan access
    app.state.settings = settings

    # Note: FastAPI's type hints for add_middleware are overly strict
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(tools.router)
    app.include_router(chat.router)

    return app
