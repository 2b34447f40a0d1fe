"""Business logic services for toolchat-server.

This package contains the turn orchestrator and the system prompt builder
it uses to describe the tool catalog to the model.
"""

from toolchat_server.services.orchestrator import TurnOrchestrator
from toolchat_server.services.system_prompts import build_tool_system_prompt
from toolchat_server.services.types import Message, TurnResult, TurnState

__all__ = [
    "Message",
    "TurnOrchestrator",
    "TurnResult",
    "TurnState",
    "build_tool_system_prompt",
]
