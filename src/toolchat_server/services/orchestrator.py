"""Chat turn orchestration.

This module contains the TurnOrchestrator, which owns the process-wide
completion client, tool host session and tool catalog, and runs each chat
turn through completion, intent extraction, optional tool invocation and
result normalization.
"""

import asyncio
import logging

from toolchat_server.config import ToolchatServerSettings
from toolchat_server.errors import NoToolsAvailableError
from toolchat_server.ollama import CompletionClient
from toolchat_server.services.system_prompts import build_tool_system_prompt
from toolchat_server.services.types import Message, TurnResult, TurnState
from toolchat_server.tools import (
    ToolCatalog,
    ToolHostSession,
    extract_tool_intent,
    normalize_tool_result,
)

logger = logging.getLogger(__name__)


class TurnOrchestrator:
    """Coordinates a single chat turn between the model and the tool host.

    The completion client, tool host session and tool catalog are created
    lazily on the first turn and reused afterwards. Initialization runs under
    a lock so concurrent first turns share one connection; if it fails, every
    singleton is reset and the next turn starts over.

    Attributes:
        settings: Server settings supplying credentials and sampling parameters
    """

    def __init__(self, settings: ToolchatServerSettings) -> None:
        self.settings = settings
        self._completion_client: CompletionClient | None = None
        self._tool_host: ToolHostSession | None = None
        self._catalog: ToolCatalog | None = None
        self._init_lock = asyncio.Lock()

    @property
    def completion_ready(self) -> bool:
        return self._completion_client is not None

    @property
    def tool_host_connected(self) -> bool:
        return self._tool_host is not None and self._tool_host.connected

    @property
    def catalog(self) -> ToolCatalog | None:
        return self._catalog

    async def ensure_ready(self) -> ToolCatalog:
        """Initialize the completion client, tool host and catalog once.

        Returns:
            ToolCatalog: The cached tool catalog

        Raises:
            ConfigurationError: If a credential is missing
            ToolHostConnectionError: If the tool host cannot be reached
            ProtocolError: If tool discovery returns a malformed response
        """
        async with self._init_lock:
            if self._catalog is not None:
                return self._catalog

            try:
                if self._completion_client is None:
                    self._completion_client = CompletionClient(
                        host=self.settings.ollama_host,
                        api_key=self.settings.ollama_api_key,
                        model=self.settings.model,
                        temperature=self.settings.temperature,
                        max_tokens=self.settings.max_tokens,
                    )

                if self._tool_host is None:
                    tool_host = ToolHostSession(
                        command=self.settings.tool_host_command,
                        args=self.settings.tool_host_args,
                        access_token=self.settings.tool_host_token,
                        routing_key=self.settings.tool_host_key,
                        token_env=self.settings.tool_host_token_env,
                        key_env=self.settings.tool_host_key_env,
                        init_timeout=self.settings.tool_host_init_timeout,
                    )
                    await tool_host.connect()
                    self._tool_host = tool_host

                tools = await self._tool_host.list_tools()
                self._catalog = ToolCatalog(tools)
            except Exception:
                logger.error("Initialization failed, resetting completion client and tool host")
                await self._reset()
                raise

            logger.info(f"Tool catalog cached with {len(self._catalog)} tools")
            return self._catalog

    async def check_completion_service(self) -> bool:
        """Probe the completion service once the client exists.

        Returns:
            bool: False when the client is not initialized or the probe fails
        """
        if self._completion_client is None:
            return False
        return await self._completion_client.check_connection()

    async def _reset(self) -> None:
        tool_host, self._tool_host = self._tool_host, None
        completion_client, self._completion_client = self._completion_client, None
        self._catalog = None

        if tool_host is not None:
            await tool_host.close()
        if completion_client is not None:
            await completion_client.close()

    def _advance(self, result: TurnResult, state: TurnState) -> None:
        logger.debug(f"Turn state: {result.state.value} -> {state.value}")
        result.state = state

    async def run_turn(self, user_message: str, history: list[Message]) -> TurnResult:
        """Run one chat turn.

        Args:
            user_message: The new user message
            history: Prior conversation messages

        Returns:
            TurnResult: The new assistant messages, in order

        Raises:
            ToolchatError: Any initialization or tool failure; completion
                service failures are replaced with a fallback message instead
        """
        result = TurnResult()

        catalog = await self.ensure_ready()
        self._advance(result, TurnState.READY)

        if not len(catalog):
            raise NoToolsAvailableError("No tools available from tool host")

        system_prompt = build_tool_system_prompt(catalog, self.settings.tool_guidance)
        self._advance(result, TurnState.COMPLETING)
        completion = await self._completion_client.complete(
            system_prompt=system_prompt,
            history=[message.to_dict() for message in history],
            user_message=user_message,
        )
        result.messages.append(Message(role="assistant", content=completion))

        intent = extract_tool_intent(completion)
        if intent is None:
            self._advance(result, TurnState.FINALIZING)
        else:
            self._advance(result, TurnState.TOOL_PENDING)
            logger.info(
                f"Model wants to use tool: {intent.tool_name} "
                f"with arguments: {intent.arguments}"
            )
            tool = catalog.require(intent.tool_name)
            tool_result = await self._tool_host.invoke(tool.name, intent.arguments)
            result.tool_name = tool.name

            self._advance(result, TurnState.FINALIZING)
            result.messages.append(
                Message(role="assistant", content=normalize_tool_result(tool.name, tool_result))
            )

        self._advance(result, TurnState.DONE)
        return result

    async def close(self) -> None:
        """Close the tool host session and the completion client."""
        async with self._init_lock:
            await self._reset()
        logger.debug("TurnOrchestrator closed")
