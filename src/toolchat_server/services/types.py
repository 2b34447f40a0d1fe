"""Data types for chat turns.

This module defines the message and turn-state structures shared by the
orchestrator and the routers.
"""

from dataclasses import dataclass, field
from enum import Enum


@dataclass
class Message:
    """A single conversation message.

    Attributes:
        role: "user" or "assistant"
        content: Message text
    """

    role: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


class TurnState(str, Enum):
    """Progress of a chat turn through the orchestrator."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    COMPLETING = "completing"
    TOOL_PENDING = "tool_pending"
    FINALIZING = "finalizing"
    DONE = "done"


@dataclass
class TurnResult:
    """Outcome of a completed chat turn.

    Attributes:
        messages: New assistant messages produced by the turn
        state: Final state of the turn (DONE on success)
        tool_name: Name of the tool that was invoked, if any
    """

    messages: list[Message] = field(default_factory=list)
    state: TurnState = TurnState.UNINITIALIZED
    tool_name: str | None = None
