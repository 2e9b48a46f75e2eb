"""Pydantic schemas for articles, categories, authors and moderation requests."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from brainfeed.schemas.base import CamelModel


class CategoryOut(CamelModel):
    id: int
    name: str
    slug: str
    description: str | None = None


class AuthorOut(CamelModel):
    id: int
    name: str
    avatar: str
    role: str
    bio: str | None = None


class ArticleOut(CamelModel):
    """Article with its category and author attached (read-only projection)."""

    id: int
    title: str
    slug: str
    excerpt: str
    content: str
    cover_image: str
    category_id: int
    author_id: int
    writer_id: int | None = None
    is_featured: bool
    read_time: int
    status: str
    clicks: int
    published_at: datetime | None = None
    created_at: datetime | None = None
    category: CategoryOut
    author: AuthorOut


class ArticleFilters(CamelModel):
    """
    Listing constraints; every field is optional and absent means unconstrained.

    Set fields are combined with AND.
    """

    category: str | None = Field(default=None, description="Category slug")
    featured: bool | None = None
    search: str | None = Field(default=None, description="Substring of the title")
    status: Literal["pending", "approved", "rejected"] | None = None
    writer_id: int | None = None


class ArticleCreate(CamelModel):
    """Draft submitted by a writer. Required text fields must not be blank."""

    title: str = Field(..., min_length=1, max_length=500)
    slug: str = Field(..., min_length=1, max_length=255)
    excerpt: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    cover_image: str = Field(..., min_length=1)
    category_id: int
    author_id: int
    read_time: int | None = Field(default=None, ge=1, le=600)


class ArticleCreated(CamelModel):
    id: int
    message: str = "Article created successfully. Waiting for admin approval."


class StatusUpdate(CamelModel):
    """Moderation decision for a pending article."""

    status: Literal["approved", "rejected"]


class StatusUpdated(CamelModel):
    id: int
    status: str
    message: str


class ClickResponse(CamelModel):
    success: bool = True
