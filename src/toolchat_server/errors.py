"""Error types raised while running a chat turn.

Every error carries the HTTP status and a short machine-readable code so the
routers can turn it into the ``{"error": ...}`` envelope without a lookup table.
"""

__all__ = [
    "ConfigurationError",
    "NoToolsAvailableError",
    "ProtocolError",
    "ToolExecutionError",
    "ToolHostConnectionError",
    "ToolchatError",
    "UnknownToolError",
    "UpstreamError",
]


class ToolchatError(Exception):
    """Base class for all turn-level failures."""

    status_code: int = 500
    code: str = "internal_error"


class ConfigurationError(ToolchatError):
    """A required credential or setting is missing."""

    code = "configuration_error"


class ToolHostConnectionError(ToolchatError):
    """The tool host could not be spawned or the MCP handshake failed."""

    status_code = 502
    code = "tool_host_connection_error"


class ProtocolError(ToolchatError):
    """The tool host answered with a malformed response."""

    status_code = 502
    code = "protocol_error"


class UpstreamError(ToolchatError):
    """The completion service failed or returned no completion."""

    status_code = 502
    code = "upstream_error"


class NoToolsAvailableError(ToolchatError):
    """The tool host advertised no tools."""

    status_code = 503
    code = "no_tools_available"


class UnknownToolError(ToolchatError):
    """The model asked for a tool that is not in the catalog."""

    status_code = 502
    code = "unknown_tool"

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Tool '{tool_name}' not found")
        self.tool_name = tool_name


class ToolExecutionError(ToolchatError):
    """The tool host reported an error or returned nothing."""

    status_code = 502
    code = "tool_execution_error"
