"""Health check response model."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the health check endpoint.

    Attributes:
        status: Health status indicator ("ok" or "error").
        version: The version of toolchat-server.
        completion_ready: Whether the completion client has been created.
        tool_host_connected: Whether the tool host session is connected.
        tools_available: Number of cached tools, or None before discovery.
    """

    status: str = Field(..., description="Health status of the service")
    version: str = Field(..., description="Version of toolchat-server")
    completion_ready: bool = Field(
        default=False,
        description="Whether the completion client has been initialized",
    )
    tool_host_connected: bool = Field(
        default=False,
        description="Whether the tool host session is connected",
    )
    tools_available: int | None = Field(
        default=None,
        description="Number of tools in the cached catalog",
    )
