"""Configuration module for toolchat-server using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TOOL_GUIDANCE = (
    "When the user asks for something one of the available tools can do, "
    "use the appropriate tool."
)


class ToolchatServerSettings(BaseSettings):
    """Main configuration settings for toolchat-server.

    All settings can be overridden via environment variables with the TOOLCHAT_ prefix.
    For example, TOOLCHAT_OLLAMA_API_KEY will override the ollama_api_key setting.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Completion service
    ollama_host: str = "https://ollama.com"
    ollama_api_key: str | None = None
    model: str = "gpt-oss:120b"
    temperature: float = 0.7
    max_tokens: int = 1000

    # Tool host (MCP server spawned over stdio)
    tool_host_command: str = "npx"
    tool_host_args: list[str] = Field(
        default_factory=lambda: ["-y", "@integration-app/mcp-server"]
    )
    tool_host_token: str | None = None
    tool_host_key: str | None = None
    tool_host_token_env: str = "INTEGRATION_APP_TOKEN"
    tool_host_key_env: str = "INTEGRATION_KEY"
    tool_host_init_timeout: float = 30.0

    # Prompting
    tool_guidance: str = DEFAULT_TOOL_GUIDANCE

    # Connect to both services at startup instead of on the first turn
    eager_init: bool = False

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="TOOLCHAT_")
