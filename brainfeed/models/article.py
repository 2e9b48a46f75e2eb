"""ORM model for articles and their moderation status."""

import enum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from brainfeed.models.base import Base


class ArticleStatus(str, enum.Enum):
    """Moderation lifecycle: pending is initial; approved and rejected are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Article(Base):
    """
    Published or in-review article.

    Only rows with status 'approved' are visible to anonymous readers.
    clicks is only ever changed by an in-database increment.
    """

    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    excerpt = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    cover_image = Column(Text, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("authors.id"), nullable=False)
    writer_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    read_time = Column(Integer, nullable=False, default=5)
    status = Column(
        String(32),
        nullable=False,
        default=ArticleStatus.PENDING.value,
        index=True,
    )
    clicks = Column(Integer, nullable=False, default=0)
    published_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    category = relationship("Category", lazy="joined")
    author = relationship("Author", lazy="joined")
