"""ORM model for usage analytics events."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, func

from brainfeed.models.base import Base


class AnalyticsEvent(Base):
    """
    One tracked reader interaction (view, read, click, search, chat).

    event_metadata holds the validated metadata map (scrollDepth, timeSpentSeconds,
    searchTerm) as JSON.
    """

    __tablename__ = "user_analytics"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String(255), nullable=False, index=True)
    article_id = Column(Integer, ForeignKey("articles.id"), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    event = Column(String(100), nullable=False)
    event_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
