"""Pydantic schemas for analytics tracking and the admin dashboard summary."""

from typing import Literal

from pydantic import ConfigDict, Field

from brainfeed.schemas.base import CamelModel

EventName = Literal["view", "read", "click", "search", "chat"]


class EventMetadata(CamelModel):
    """Recognized metadata keys for a tracked event; anything else is rejected."""

    model_config = ConfigDict(extra="forbid")

    scroll_depth: float | None = Field(default=None, ge=0, le=100)
    time_spent_seconds: float | None = Field(default=None, ge=0)
    search_term: str | None = Field(default=None, max_length=255)


class TrackEventRequest(CamelModel):
    session_id: str = Field(..., min_length=1, max_length=255)
    event: EventName
    article_id: int | None = None
    category_id: int | None = None
    metadata: EventMetadata | None = None


class TrackEventResponse(CamelModel):
    success: bool = True


class TopArticle(CamelModel):
    id: int
    title: str
    views: int


class TopCategory(CamelModel):
    id: int
    name: str
    views: int


class SearchTermCount(CamelModel):
    term: str
    count: int


class ChatEngagement(CamelModel):
    total_chats: int
    average_messages_per_session: float


class UserBehavior(CamelModel):
    avg_time_per_article: float
    scroll_depth_avg: int
    top_search_terms: list[SearchTermCount]


class DashboardResponse(CamelModel):
    days: int
    total_sessions: int
    total_events: int
    top_articles: list[TopArticle]
    top_categories: list[TopCategory]
    event_breakdown: dict[str, int]
    chat_engagement: ChatEngagement
    user_behavior: UserBehavior
