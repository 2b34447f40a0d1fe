"""Health check endpoint router."""

import logging

from fastapi import APIRouter, Request

from toolchat_server import __version__
from toolchat_server.models.health import HealthResponse
from toolchat_server.services import TurnOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint.

    Reports the version and whether the completion client and tool host have
    been initialized. It only inspects state and never opens connections.

    Args:
        request: The FastAPI request object.

    Returns:
        HealthResponse: Health status and initialization state.
    """
    orchestrator: TurnOrchestrator | None = getattr(
        request.app.state, "orchestrator", None
    )
    if orchestrator is None:
        return HealthResponse(status="ok", version=__version__)

    catalog = orchestrator.catalog
    logger.debug(
        f"Health check: completion_ready={orchestrator.completion_ready}, "
        f"tool_host_connected={orchestrator.tool_host_connected}"
    )
    return HealthResponse(
        status="ok",
        version=__version__,
        completion_ready=orchestrator.completion_ready,
        tool_host_connected=orchestrator.tool_host_connected,
        tools_available=len(catalog) if catalog is not None else None,
    )
