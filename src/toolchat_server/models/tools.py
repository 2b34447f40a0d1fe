"""Pydantic models for the tool catalog endpoint."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ToolResponse(BaseModel):
    """A single tool advertised by the tool host."""

    name: str = Field(description="Tool name")
    description: str = Field(default="", description="Tool description")
    input_schema: dict[str, Any] = Field(
        default_factory=dict,
        alias="inputSchema",
        description="JSON schema of the tool arguments",
    )

    model_config = ConfigDict(populate_by_name=True)


class ToolListResponse(BaseModel):
    """Response body for GET /api/v1/tools."""

    tools: list[ToolResponse] = Field(description="Cached tool catalog")
