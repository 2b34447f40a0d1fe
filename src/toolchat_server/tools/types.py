"""Type definitions for the tool host integration.

This module contains dataclasses for the tools advertised by the tool host,
the catalog that caches them, the intent extracted from a completion, and the
two shapes a tool invocation result can take.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator

from toolchat_server.errors import ProtocolError, UnknownToolError

logger = logging.getLogger(__name__)


def get_field(obj: Any, *keys: str, default: Any = None) -> Any:
    """Read a field from either an SDK object or a plain dict.

    Several keys may be given for fields whose spelling differs between
    protocol versions (``inputSchema`` and ``input_schema``); the first one
    present wins.
    """
    for key in keys:
        if isinstance(obj, dict):
            if key in obj:
                return obj[key]
        elif hasattr(obj, key):
            return getattr(obj, key)
    return default


@dataclass(frozen=True)
class Tool:
    """A tool advertised by the tool host.

    Attributes:
        name: Unique tool name within the catalog (e.g., "create-contact")
        description: Human-readable description shown to the model
        input_schema: JSON schema describing the tool arguments
    """

    name: str
    description: str = ""
    input_schema: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_mcp_tool(tool_data: Any) -> "Tool":
        """Create a Tool from an MCP tool object or its dict form.

        Args:
            tool_data: An ``mcp.types.Tool`` or a dict with name/description/inputSchema

        Returns:
            Tool: Parsed tool definition

        Raises:
            ProtocolError: If the entry has no usable name
        """
        name = get_field(tool_data, "name")
        if not isinstance(name, str) or not name:
            raise ProtocolError("Tool discovery entry is missing the 'name' field")

        description = get_field(tool_data, "description") or ""
        input_schema = get_field(tool_data, "inputSchema", "input_schema") or {}
        if not isinstance(input_schema, dict):
            input_schema = dict(input_schema)

        return Tool(name=name, description=description, input_schema=input_schema)


class ToolCatalog:
    """Ordered, read-only collection of tools keyed by name.

    Built once from the tool host's discovery response and reused for every
    turn. Duplicate names keep the first definition.
    """

    def __init__(self, tools: list[Tool] | None = None) -> None:
        self._tools: tuple[Tool, ...] = ()
        self._by_name: dict[str, Tool] = {}

        kept: list[Tool] = []
        for tool in tools or []:
            if tool.name in self._by_name:
                logger.warning(f"Duplicate tool {tool.name!r} ignored")
                continue
            self._by_name[tool.name] = tool
            kept.append(tool)
        self._tools = tuple(kept)

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def names(self) -> list[str]:
        return [tool.name for tool in self._tools]

    def get(self, name: str) -> Tool | None:
        return self._by_name.get(name)

    def require(self, name: str) -> Tool:
        """Look up a tool by name.

        Raises:
            UnknownToolError: If the catalog has no tool with that name
        """
        tool = self._by_name.get(name)
        if tool is None:
            raise UnknownToolError(name)
        return tool


@dataclass
class ToolInvocationIntent:
    """A tool call requested by the model in its completion text."""

    tool_name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass
class ContentItem:
    """One typed item of a tool result's content sequence.

    Non-text items (images, embedded resources) keep their type and have
    ``text`` set to None.
    """

    type: str
    text: str | None = None


@dataclass
class ContentResult:
    """Tool result that carries a content sequence."""

    items: list[ContentItem] = field(default_factory=list)
    kind: str = field(default="content", init=False)

    @property
    def text_items(self) -> list[str]:
        return [
            item.text
            for item in self.items
            if item.type == "text" and item.text is not None
        ]


@dataclass
class OpaqueResult:
    """Tool result without a content sequence."""

    payload: Any = None
    kind: str = field(default="opaque", init=False)


ToolInvocationResult = ContentResult | OpaqueResult


def parse_tool_result(raw: Any) -> ToolInvocationResult:
    """Convert a raw MCP ``CallToolResult`` (or its dict form) into a tagged result.

    A result exposes a content sequence when its ``content`` field is a list;
    an empty list still counts as a content-bearing result. Anything else is
    kept as an opaque payload (preferring ``structuredContent`` when present).

    Args:
        raw: The tool host response

    Returns:
        ContentResult or OpaqueResult
    """
    content = get_field(raw, "content")
    structured = get_field(raw, "structuredContent", "structured_content")
    if isinstance(content, list) and (content or not structured):
        items = []
        for entry in content:
            item_type = get_field(entry, "type", default="unknown")
            text = get_field(entry, "text") if item_type == "text" else None
            items.append(ContentItem(type=item_type, text=text))
        return ContentResult(items=items)

    return OpaqueResult(payload=structured if structured is not None else raw)
