"""Declarative base shared by the content, chat and analytics tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base for all ORM models; alembic/env.py targets Base.metadata."""
