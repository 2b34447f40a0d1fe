"""Completion service client.

This package provides the async client wrapper used to request chat
completions from an Ollama-compatible service.
"""

from toolchat_server.ollama.client import FALLBACK_RESPONSE, CompletionClient

__all__ = ["CompletionClient", "FALLBACK_RESPONSE"]
