"""
Pydantic models for the chat endpoint.

The client owns the conversation: it sends the prior turns with every request
and gets the extended history back, so the server keeps no per-user state
besides the schedule itself.
"""
from typing import Literal

from pydantic import BaseModel, Field


class ChatTurn(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    message: str = Field(
        ...,
        min_length=1,
        max_length=1000,
        description="Natural language instruction or question about the schedule",
    )
    history: list[ChatTurn] = Field(default_factory=list, max_length=200)


class ChatResponse(BaseModel):
    answer: str
    tool_used: str | None = None
    data_changed: bool = False
    history: list[ChatTurn] = []
