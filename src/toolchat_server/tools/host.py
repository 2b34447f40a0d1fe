"""MCP tool host session.

This module spawns the tool host as a child process, speaks the Model Context
Protocol to it over stdio, and keeps that connection open for the lifetime of
the server. The MCP client streams are owned by a single background task, so
the connection can be opened from one request and used from any other.
"""

import asyncio
import logging
import os
from typing import Any

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client
from mcp.types import Implementation

from toolchat_server.errors import (
    ConfigurationError,
    ProtocolError,
    ToolchatError,
    ToolExecutionError,
    ToolHostConnectionError,
)
from toolchat_server.tools.types import (
    Tool,
    ToolInvocationResult,
    get_field,
    parse_tool_result,
)

logger = logging.getLogger(__name__)

CLIENT_NAME = "toolchat-server"
CLIENT_VERSION = "0.1.0"


def mask_secret(value: str, visible: int = 10) -> str:
    """Return the first characters of a secret followed by an ellipsis."""
    return value[:visible] + "..."


def unwrap_exception_group(exc: Exception) -> Exception:
    """Return the sole member of nested single-error task group failures."""
    while isinstance(exc, ExceptionGroup) and len(exc.exceptions) == 1:
        exc = exc.exceptions[0]
    return exc


class StderrForwarder:
    """Pipe that relays the tool host's stderr into the logger line by line.

    The write end is handed to the child process; the parent's copy is closed
    once the child has been spawned so the reader sees EOF when the child exits.
    """

    def __init__(self) -> None:
        read_fd, write_fd = os.pipe()
        self.errlog = os.fdopen(write_fd, "w")
        self._read_file = os.fdopen(read_fd, "rb")
        self._task: asyncio.Task | None = None
        self._transport: asyncio.BaseTransport | None = None

    async def start(self) -> None:
        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader()
        self._transport, _ = await loop.connect_read_pipe(
            lambda: asyncio.StreamReaderProtocol(reader), self._read_file
        )
        self._task = asyncio.create_task(self._pump(reader))

    def release_write_end(self) -> None:
        if not self.errlog.closed:
            self.errlog.close()

    async def _pump(self, reader: asyncio.StreamReader) -> None:
        while line := await reader.readline():
            logger.info(f"[tool host] {line.decode('utf-8', errors='replace').rstrip()}")

    async def stop(self, drain_timeout: float = 1.0) -> None:
        self.release_write_end()
        if self._task is not None:
            try:
                await asyncio.wait_for(self._task, timeout=drain_timeout)
            except asyncio.TimeoutError:
                logger.debug("Tool host stderr still open after shutdown, stopped reading")
            self._task = None
        if self._transport is not None:
            self._transport.close()
            self._transport = None
        elif not self._read_file.closed:
            self._read_file.close()


class ToolHostSession:
    """Connection to the MCP tool host.

    The host is spawned with the access token and routing key in its
    environment. Once connected, the session can list the host's tools and
    invoke them one at a time. Diagnostic output written by the host to stderr
    is forwarded to this module's logger.

    Attributes:
        command: Executable that starts the tool host (e.g., "npx")
        args: Arguments passed to the command
        init_timeout: Seconds to wait for the MCP initialize handshake
    """

    def __init__(
        self,
        command: str,
        args: list[str],
        access_token: str | None,
        routing_key: str | None,
        token_env: str = "INTEGRATION_APP_TOKEN",
        key_env: str = "INTEGRATION_KEY",
        init_timeout: float = 30.0,
    ) -> None:
        self.command = command
        self.args = list(args)
        self.init_timeout = init_timeout
        self._access_token = access_token
        self._routing_key = routing_key
        self._token_env = token_env
        self._key_env = key_env

        self._session: ClientSession | None = None
        self._runner: asyncio.Task | None = None
        self._closing: asyncio.Event | None = None

    @property
    def connected(self) -> bool:
        return self._session is not None

    def _server_parameters(self) -> StdioServerParameters:
        return StdioServerParameters(
            command=self.command,
            args=self.args,
            env={
                self._token_env: self._access_token,
                self._key_env: self._routing_key,
            },
        )

    async def connect(self) -> None:
        """Spawn the tool host and complete the MCP handshake.

        Raises:
            ConfigurationError: If the access token or routing key is missing
            ToolHostConnectionError: If the process cannot start or the
                handshake fails or times out
        """
        if self._session is not None:
            return

        if not self._access_token or not self._routing_key:
            raise ConfigurationError(
                f"Missing tool host credentials: set TOOLCHAT_TOOL_HOST_TOKEN "
                f"and TOOLCHAT_TOOL_HOST_KEY (passed to the host as "
                f"{self._token_env} and {self._key_env})"
            )

        logger.info(f"Starting tool host: {self.command} {' '.join(self.args)}")
        logger.info(f"Using tool host token {mask_secret(self._access_token)}")
        logger.info(f"Using tool host key {self._routing_key}")

        loop = asyncio.get_running_loop()
        ready: asyncio.Future[ClientSession] = loop.create_future()
        self._closing = asyncio.Event()
        self._runner = asyncio.create_task(self._run(ready), name="tool-host-session")

        try:
            self._session = await ready
        except ToolchatError:
            await self.close()
            raise
        except Exception as e:
            await self.close()
            raise ToolHostConnectionError(f"Failed to connect to tool host: {e}") from e

        logger.info("Tool host connected")

    async def _run(self, ready: "asyncio.Future[ClientSession]") -> None:
        """Own the MCP streams until close() is requested."""
        forwarder: StderrForwarder | None = None
        try:
            forwarder = StderrForwarder()
            await forwarder.start()
            async with stdio_client(
                self._server_parameters(), errlog=forwarder.errlog
            ) as (read_stream, write_stream):
                forwarder.release_write_end()
                async with ClientSession(
                    read_stream,
                    write_stream,
                    client_info=Implementation(name=CLIENT_NAME, version=CLIENT_VERSION),
                ) as session:
                    try:
                        await asyncio.wait_for(
                            session.initialize(), timeout=self.init_timeout
                        )
                    except asyncio.TimeoutError:
                        raise ToolHostConnectionError(
                            f"Tool host handshake did not complete within "
                            f"{self.init_timeout}s"
                        ) from None
                    ready.set_result(session)
                    await self._closing.wait()
        except Exception as e:
            error = unwrap_exception_group(e)
            if not ready.done():
                ready.set_exception(error)
            else:
                logger.error(f"Tool host session terminated: {error}")
        finally:
            self._session = None
            if forwarder is not None:
                await forwarder.stop()
            if not ready.done():
                ready.set_exception(
                    ToolHostConnectionError("Tool host exited before the handshake completed")
                )

    async def list_tools(self) -> list[Tool]:
        """Ask the tool host for its advertised tools.

        Returns:
            list[Tool]: Tools in the order the host listed them

        Raises:
            ToolHostConnectionError: If the session is not connected
            ProtocolError: If the response has no tools field or a nameless entry
        """
        session = self._require_session()
        response = await session.list_tools()

        tools = get_field(response, "tools")
        if not isinstance(tools, list):
            raise ProtocolError("Unexpected response format from tools/list: missing 'tools'")

        parsed = [Tool.from_mcp_tool(tool) for tool in tools]
        logger.info(f"Tools found: {[tool.name for tool in parsed]}")
        return parsed

    async def invoke(self, tool_name: str, arguments: dict[str, Any]) -> ToolInvocationResult:
        """Call a single tool on the host.

        The caller must have checked that ``tool_name`` is in the catalog.

        Args:
            tool_name: Name of the tool to call
            arguments: Tool arguments keyed by parameter name

        Returns:
            ToolInvocationResult: The tagged tool result

        Raises:
            ToolHostConnectionError: If the session is not connected
            ToolExecutionError: If the call fails, returns nothing, or is
                flagged as an error by the host
        """
        session = self._require_session()
        logger.info(f"Calling tool {tool_name} with arguments: {arguments}")

        try:
            response = await session.call_tool(tool_name, arguments)
        except Exception as e:
            raise ToolExecutionError(f"Tool '{tool_name}' failed: {e}") from e

        if response is None:
            raise ToolExecutionError(f"Empty response from tool '{tool_name}'")

        result = parse_tool_result(response)
        if get_field(response, "isError", "is_error", default=False):
            detail = " ".join(getattr(result, "text_items", [])) or "no details"
            raise ToolExecutionError(f"Tool '{tool_name}' reported an error: {detail}")

        logger.debug(f"Tool {tool_name} returned a {result.kind} result")
        return result

    def _require_session(self) -> ClientSession:
        if self._session is None:
            raise ToolHostConnectionError("Tool host session is not connected")
        return self._session

    async def close(self) -> None:
        """Shut down the MCP session and the tool host process."""
        if self._closing is not None:
            self._closing.set()
        if self._runner is not None:
            runner, self._runner = self._runner, None
            await runner
        self._session = None
        logger.debug("ToolHostSession closed")
