"""SQLAlchemy ORM models."""

from brainfeed.models.analytics import AnalyticsEvent
from brainfeed.models.article import Article, ArticleStatus
from brainfeed.models.base import Base
from brainfeed.models.catalog import Author, Category
from brainfeed.models.conversation import Conversation, ConversationMessage
from brainfeed.models.user import User

__all__ = [
    "AnalyticsEvent",
    "Article",
    "ArticleStatus",
    "Author",
    "Base",
    "Category",
    "Conversation",
    "ConversationMessage",
    "User",
]
