"""System prompt construction.

This module renders the tool catalog into the system prompt sent with every
completion request, together with the instructions that establish the JSON
convention the model uses to ask for a tool.
"""

import json
import logging

from toolchat_server.config import DEFAULT_TOOL_GUIDANCE
from toolchat_server.tools.types import Tool, ToolCatalog

logger = logging.getLogger(__name__)

SYSTEM_PROMPT_TEMPLATE = """You are a helpful AI assistant that can use tools to help users.
Available tools:
{tool_descriptions}

{tool_guidance}
Otherwise, just have a normal conversation.
Do not mention the tools unless the user specifically asks about them.
If you need to use a tool, respond with a JSON object in this format:
{{
  "useTool": true,
  "toolName": "name-of-tool",
  "toolArguments": {{ "param1": "value1", "param2": "value2" }}
}}

If you don't need to use a tool, just respond normally."""


def describe_tool(tool: Tool) -> str:
    """Render a single tool as a prompt block."""
    return (
        f"Tool: {tool.name}\n"
        f"Description: {tool.description}\n"
        f"Input Schema: {json.dumps(tool.input_schema)}"
    )


def build_tool_system_prompt(
    catalog: ToolCatalog,
    tool_guidance: str = DEFAULT_TOOL_GUIDANCE,
) -> str:
    """Build the tool-aware system prompt for a catalog.

    Args:
        catalog: The cached tool catalog
        tool_guidance: Sentence telling the model when a tool should be used

    Returns:
        str: The system prompt
    """
    tool_descriptions = "\n\n".join(describe_tool(tool) for tool in catalog)
    prompt = SYSTEM_PROMPT_TEMPLATE.format(
        tool_descriptions=tool_descriptions,
        tool_guidance=tool_guidance,
    )
    logger.debug(f"Built system prompt for {len(catalog)} tools ({len(prompt)} characters)")
    return prompt
