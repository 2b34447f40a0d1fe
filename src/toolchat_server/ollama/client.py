"""Async completion client wrapper around Ollama.

This module provides an async wrapper around the ollama.AsyncClient for
requesting chat completions. The client is created once, on the first chat
turn, and reused for the lifetime of the server.
"""

import logging
from typing import Any, AsyncIterator

import ollama

from toolchat_server.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE = "I'm sorry, I couldn't generate a response."


class CompletionClient:
    """Async client for requesting completions from an Ollama-compatible service.

    This client wraps ollama.AsyncClient, authenticates every request with the
    service API key, and applies fixed sampling parameters. Completions use the
    streaming chat API and are collected before being returned.

    Attributes:
        host: The completion service URL (e.g., "https://ollama.com")
        model: The model name used for every completion
        temperature: Sampling temperature
        max_tokens: Upper bound on generated tokens
        _client: The underlying ollama.AsyncClient instance
    """

    def __init__(
        self,
        host: str,
        api_key: str | None,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ) -> None:
        """Initialize the completion client.

        Args:
            host: The completion service URL
            api_key: Service credential sent as a bearer token
            model: Model name to request completions from
            temperature: Sampling temperature
            max_tokens: Maximum number of tokens to generate

        Raises:
            ConfigurationError: If the API key is missing
        """
        if not api_key:
            raise ConfigurationError(
                "Missing completion service API key (set TOOLCHAT_OLLAMA_API_KEY)"
            )

        self.host = host
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = ollama.AsyncClient(
            host=host,
            headers={"Authorization": f"Bearer {api_key}"},
        )
        logger.info(f"CompletionClient initialized with host: {host}, model: {model}")

    @property
    def options(self) -> dict[str, Any]:
        """Sampling options sent with every completion request."""
        return {"temperature": self.temperature, "num_predict": self.max_tokens}

    async def check_connection(self) -> bool:
        """Check if the completion service is reachable.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            await self._client.list()
            logger.debug("Completion service connection check: successful")
            return True
        except Exception as e:
            logger.warning(f"Completion service connection check failed: {e}")
            return False

    async def chat_stream(
        self,
        messages: list[dict[str, Any]],
        options: dict[str, Any] | None = None,
    ) -> AsyncIterator[dict[str, Any]]:
        """Stream chat responses from the completion service.

        Args:
            messages: List of message dicts: [{"role": "user", "content": "..."}, ...]
            options: Optional model parameters (temperature, etc.)

        Yields:
            dict: Response chunks. Each chunk contains:
                  - model: str - The model name
                  - message: dict - Contains role and content
                  - done: bool - True on the final chunk

        Raises:
            Exception: If the service request fails
        """
        logger.debug(f"Starting chat stream with model: {self.model}")
        logger.debug(f"Message count: {len(messages)}")

        async for chunk in await self._client.chat(
            model=self.model,
            messages=messages,
            stream=True,
            options=options,
        ):
            if hasattr(chunk, "model_dump"):
                chunk_dict = chunk.model_dump()
            elif isinstance(chunk, dict):
                chunk_dict = chunk
            else:
                chunk_dict = vars(chunk)

            yield chunk_dict

        logger.debug("Chat stream completed")

    async def _collect_completion(self, messages: list[dict[str, Any]]) -> str:
        """Collect a complete completion from the streaming API.

        Raises:
            UpstreamError: If the stream fails, never finishes, or is empty
        """
        content_parts = []
        final_chunk = None

        try:
            async for chunk in self.chat_stream(messages, options=self.options):
                message = chunk.get("message") or {}
                content = message.get("content") or ""
                if content:
                    content_parts.append(content)

                if chunk.get("done"):
                    final_chunk = chunk
                    break
        except Exception as e:
            raise UpstreamError(f"Failed to get response from completion service: {e}") from e

        if final_chunk is None:
            raise UpstreamError("Stream ended without completion marker")

        complete_content = "".join(content_parts)
        if not complete_content.strip():
            raise UpstreamError("Completion service returned an empty completion")

        return complete_content

    async def complete(
        self,
        system_prompt: str,
        history: list[dict[str, str]],
        user_message: str,
    ) -> str:
        """Request a completion for one chat turn.

        Failures of the completion service do not fail the turn: they are
        logged and replaced with a fallback apology.

        Args:
            system_prompt: The tool-aware system prompt
            history: Prior conversation as [{"role": ..., "content": ...}, ...]
            user_message: The new user message

        Returns:
            str: The completion text, or FALLBACK_RESPONSE
        """
        messages = [
            {"role": "system", "content": system_prompt},
            *history,
            {"role": "user", "content": user_message},
        ]

        try:
            content = await self._collect_completion(messages)
        except UpstreamError as e:
            logger.error(f"Completion failed, using fallback response: {e}")
            return FALLBACK_RESPONSE

        logger.info(f"Received complete response: {len(content)} characters")
        return content

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client._client.aclose()
        logger.debug("CompletionClient closed")
