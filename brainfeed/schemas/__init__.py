"""Pydantic request/response schemas."""

from brainfeed.schemas.analytics import (
    DashboardResponse,
    EventMetadata,
    TrackEventRequest,
    TrackEventResponse,
)
from brainfeed.schemas.articles import (
    ArticleCreate,
    ArticleCreated,
    ArticleFilters,
    ArticleOut,
    AuthorOut,
    CategoryOut,
    StatusUpdate,
)
from brainfeed.schemas.auth import LoginRequest, LoginResponse, SessionData, UserOut
from brainfeed.schemas.chat import (
    ChatMessageRequest,
    ChatMessageResponse,
    ConversationOut,
)
from brainfeed.schemas.health import HealthResponse

__all__ = [
    "ArticleCreate",
    "ArticleCreated",
    "ArticleFilters",
    "ArticleOut",
    "AuthorOut",
    "CategoryOut",
    "ChatMessageRequest",
    "ChatMessageResponse",
    "ConversationOut",
    "DashboardResponse",
    "EventMetadata",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "SessionData",
    "StatusUpdate",
    "TrackEventRequest",
    "TrackEventResponse",
    "UserOut",
]
