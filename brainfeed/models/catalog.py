"""ORM models for static reference data: categories and authors."""

from sqlalchemy import Column, Integer, String, Text

from brainfeed.models.base import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)


class Author(Base):
    """Byline shown on articles (independent of the staff User who submitted them)."""

    __tablename__ = "authors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    avatar = Column(Text, nullable=False)
    role = Column(String(100), nullable=False)
    bio = Column(Text, nullable=True)
