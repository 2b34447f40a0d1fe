"""Extraction of tool-call intents from free-form completion text.

The model is instructed to answer with a JSON object such as
``{"useTool": true, "toolName": "...", "toolArguments": {...}}`` when it wants
a tool to run. Models often wrap that object in prose or code fences, so the
extractor looks for the first decodable object that carries a ``useTool`` key
and ignores everything around it.
"""

import json
import logging

from toolchat_server.tools.types import ToolInvocationIntent

logger = logging.getLogger(__name__)

INTENT_MARKER = '"useTool"'

_decoder = json.JSONDecoder()


def _find_intent_object(text: str) -> dict | None:
    """Return the first JSON object in ``text`` that has a ``useTool`` key."""
    last_marker = text.rfind(INTENT_MARKER)
    if last_marker == -1:
        return None

    # Any brace ahead of the last marker may open the intent object.
    start = text.find("{")
    while start != -1 and start < last_marker:
        try:
            candidate, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            candidate = None
        if isinstance(candidate, dict) and "useTool" in candidate:
            return candidate
        start = text.find("{", start + 1)

    logger.debug("Completion mentions useTool but holds no decodable intent object")
    return None


def extract_tool_intent(text: str) -> ToolInvocationIntent | None:
    """Extract a tool invocation intent from completion text.

    Only the first object carrying a ``useTool`` key is considered. Malformed
    JSON, a falsy ``useTool`` and incomplete intents all mean "no tool".

    Args:
        text: The completion text returned by the model

    Returns:
        ToolInvocationIntent | None: The requested tool call, or None

    Example:
        >>> extract_tool_intent(
        ...     'Sure! {"useTool": true, "toolName": "create-contact", '
        ...     '"toolArguments": {"name": "Jane"}}'
        ... )
        ToolInvocationIntent(tool_name='create-contact', arguments={'name': 'Jane'})
    """
    if not text:
        return None

    data = _find_intent_object(text)
    if data is None or not data.get("useTool"):
        logger.debug("No tool usage detected in completion")
        return None

    tool_name = data.get("toolName")
    if not isinstance(tool_name, str) or not tool_name:
        logger.warning(f"Ignoring tool intent without a valid toolName: {tool_name!r}")
        return None

    arguments = data.get("toolArguments")
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        logger.warning(
            f"Ignoring tool intent for {tool_name}: toolArguments is "
            f"{type(arguments).__name__}, expected an object"
        )
        return None

    return ToolInvocationIntent(tool_name=tool_name, arguments=arguments)
