"""Pydantic models for chat API requests and responses.

This module defines the request and response schemas for the chat turn
endpoint. Field names on the wire are camelCase.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """A single message in the conversation history or turn output."""

    role: Literal["user", "assistant"] = Field(description="Message role")
    content: str = Field(description="Message content")


class ChatTurnRequest(BaseModel):
    """Request body for POST /api/v1/chat."""

    user_message: str = Field(
        alias="userMessage",
        description="The new message from the user.",
    )
    history: list[ChatMessage] = Field(
        default_factory=list,
        description="Prior conversation messages, oldest first.",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "userMessage": "Add Jane Doe to my contacts",
                    "history": [
                        {"role": "user", "content": "Hi"},
                        {"role": "assistant", "content": "Hello! How can I help?"},
                    ],
                }
            ]
        },
    )


class ChatTurnResponse(BaseModel):
    """Response body for a successful chat turn."""

    new_messages: list[ChatMessage] = Field(
        alias="newMessages",
        description="Assistant messages produced by this turn",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "newMessages": [
                    {"role": "assistant", "content": "I'll add Jane Doe now."},
                    {
                        "role": "assistant",
                        "content": "create-contact completed successfully with ID: 42",
                    },
                ]
            }
        },
    )


class ErrorResponse(BaseModel):
    """Response body for a failed request."""

    error: str = Field(description="Error message")
