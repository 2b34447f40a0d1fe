"""Chat API endpoint.

This module provides the endpoint that runs a single chat turn: the model
answers the user and, when it asks for one, a tool is run on the tool host.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from toolchat_server.dependencies import get_orchestrator
from toolchat_server.errors import ToolchatError
from toolchat_server.models.chat import (
    ChatMessage,
    ChatTurnRequest,
    ChatTurnResponse,
    ErrorResponse,
)
from toolchat_server.services import Message, TurnOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/chat", tags=["chat"])


def error_response(exc: Exception) -> JSONResponse:
    """Build the uniform error envelope for a failed request.

    Args:
        exc: The error that aborted the request

    Returns:
        JSONResponse: ``{"error": ...}`` with the error's status code
    """
    status_code = exc.status_code if isinstance(exc, ToolchatError) else 500
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=str(exc)).model_dump(),
    )


@router.post(
    "",
    response_model=ChatTurnResponse,
    responses={
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def run_chat_turn(
    request_body: ChatTurnRequest,
    orchestrator: TurnOrchestrator = Depends(get_orchestrator),
) -> ChatTurnResponse | JSONResponse:
    """Run one chat turn and return the new assistant messages.

    Args:
        request_body: The user message and prior history
        orchestrator: Injected turn orchestrator

    Returns:
        ChatTurnResponse with one message, or two when a tool was used.
        Failures return ``{"error": ...}`` with a non-2xx status.
    """
    history = [
        Message(role=message.role, content=message.content)
        for message in request_body.history
    ]
    logger.info(f"Running chat turn with {len(history)} history messages")

    try:
        result = await orchestrator.run_turn(request_body.user_message, history)
    except ToolchatError as e:
        logger.error(f"Chat turn failed ({e.code}): {e}")
        return error_response(e)
    except Exception as e:
        logger.exception(f"Unexpected error during chat turn: {e}")
        return error_response(e)

    if result.tool_name:
        logger.info(f"Chat turn completed with tool {result.tool_name}")

    return ChatTurnResponse(
        new_messages=[
            ChatMessage(role=message.role, content=message.content)
            for message in result.messages
        ]
    )
