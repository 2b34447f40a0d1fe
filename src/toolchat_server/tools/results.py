"""Normalization of tool results into user-facing confirmation text."""

import json
import logging
from typing import Any

from toolchat_server.tools.types import ContentResult, ToolInvocationResult

logger = logging.getLogger(__name__)

GENERIC_SUCCESS_MESSAGE = "Operation completed successfully."
ID_CONFIRMATION_TEMPLATE = "{tool_name} completed successfully with ID: {id}"


def _parse_object(text: str) -> dict[str, Any] | None:
    """Parse ``text`` as a JSON object when it is fully brace-delimited."""
    if not (text.startswith("{") and text.endswith("}")):
        return None
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        logger.debug(f"Could not parse tool content as JSON: {e}")
        return None
    return parsed if isinstance(parsed, dict) else None


def normalize_tool_result(tool_name: str, result: ToolInvocationResult) -> str:
    """Turn a tool result into the confirmation message shown to the user.

    Text items are joined with a single space. A JSON object with an ``id``
    becomes a templated confirmation, any other text is returned verbatim, and
    results without text fall back to a generic success message.

    Args:
        tool_name: Name of the tool that produced the result
        result: The tagged tool result

    Returns:
        str: The message content for the tool outcome
    """
    if not isinstance(result, ContentResult):
        logger.debug(f"Tool {tool_name} returned an opaque result")
        return GENERIC_SUCCESS_MESSAGE

    text = " ".join(result.text_items)
    if not text:
        return GENERIC_SUCCESS_MESSAGE

    parsed = _parse_object(text)
    if parsed is not None and parsed.get("id") is not None:
        return ID_CONFIRMATION_TEMPLATE.format(tool_name=tool_name, id=parsed["id"])

    return text
