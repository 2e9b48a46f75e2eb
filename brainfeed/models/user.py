"""ORM model for application users (session login and RBAC)."""

from sqlalchemy import Column, DateTime, Integer, String, func

from brainfeed.models.base import Base


class User(Base):
    """
    Staff account that can sign in.

    role: 'admin' (moderates articles) or 'writer' (submits articles)
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="writer")
    name = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
