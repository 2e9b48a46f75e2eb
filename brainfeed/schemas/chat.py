"""Pydantic schemas for the chat assistant endpoints."""

from datetime import datetime

from pydantic import Field

from brainfeed.schemas.articles import ArticleOut
from brainfeed.schemas.base import CamelModel


class ChatMessageRequest(CamelModel):
    session_id: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1, max_length=8000)


class ChatMessageResponse(CamelModel):
    conversation_id: int
    message_id: int = Field(description="Id of the stored user message")
    response: str
    suggested_articles: list[ArticleOut]


class ConversationMessageOut(CamelModel):
    id: int
    conversation_id: int
    role: str
    content: str
    created_at: datetime | None = None


class ConversationOut(CamelModel):
    id: int
    session_id: str
    title: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    messages: list[ConversationMessageOut]
