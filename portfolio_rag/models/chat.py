"""
Chat domain models and schemas.

Request schemas for chat operations and the retrieved context items.

Dependencies: pydantic
System role: Chat API contracts
"""

from typing import Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """Single conversation turn sent by the client."""

    role: Literal["user", "assistant"] = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")


class ChatRequest(BaseModel):
    """Request schema for a chat turn."""

    messages: list[ChatMessage] = Field(min_length=1, description="Conversation so far, oldest first")


class RetrievedContext(BaseModel):
    """Knowledge base passage retrieved for a question."""

    content: str
    score: float = Field(ge=0.0, le=1.0)
    source: str = "unknown"
    file_name: str | None = None
