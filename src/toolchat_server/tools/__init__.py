"""Tool host connection, catalog, intent extraction and result handling.

This package talks to the MCP tool host, caches the tools it advertises,
extracts tool-call intents from completion text, and turns tool results
into user-facing messages.
"""

from toolchat_server.tools.host import ToolHostSession
from toolchat_server.tools.intent import extract_tool_intent
from toolchat_server.tools.results import normalize_tool_result
from toolchat_server.tools.types import (
    ContentItem,
    ContentResult,
    OpaqueResult,
    Tool,
    ToolCatalog,
    ToolInvocationIntent,
    ToolInvocationResult,
    parse_tool_result,
)

__all__ = [
    "ContentItem",
    "ContentResult",
    "OpaqueResult",
    "Tool",
    "ToolCatalog",
    "ToolHostSession",
    "ToolInvocationIntent",
    "ToolInvocationResult",
    "extract_tool_intent",
    "normalize_tool_result",
    "parse_tool_result",
]
