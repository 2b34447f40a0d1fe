"""Tool catalog endpoint router."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from toolchat_server.dependencies import get_orchestrator
from toolchat_server.errors import ToolchatError
from toolchat_server.models.chat import ErrorResponse
from toolchat_server.models.tools import ToolListResponse, ToolResponse
from toolchat_server.routers.chat import error_response
from toolchat_server.services import TurnOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/tools", tags=["tools"])


@router.get(
    "",
    response_model=ToolListResponse,
    responses={500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def list_tools(
    orchestrator: TurnOrchestrator = Depends(get_orchestrator),
) -> ToolListResponse | JSONResponse:
    """List the tools advertised by the tool host.

    Connects to the tool host on first use, exactly like a chat turn would,
    and returns the cached catalog afterwards.
    """
    try:
        catalog = await orchestrator.ensure_ready()
    except ToolchatError as e:
        logger.error(f"Failed to load tool catalog ({e.code}): {e}")
        return error_response(e)

    return ToolListResponse(
        tools=[
            ToolResponse(
                name=tool.name,
                description=tool.description,
                input_schema=tool.input_schema,
            )
            for tool in catalog
        ]
    )
