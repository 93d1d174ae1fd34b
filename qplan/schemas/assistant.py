"""Pydantic schemas for the assistant chat endpoint."""
from typing import Literal
from pydantic import BaseModel


class ChatMessage(BaseModel):
    role: Literal["user", "bot"]
    content: str


class ChatRequest(BaseModel):
    question: str = ""
    messages: list[ChatMessage] = []


class ChatResponse(BaseModel):
    answer: str | None = None
    messages: list[ChatMessage]
