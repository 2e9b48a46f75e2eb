"""Article listing and lookup with the public visibility rule applied."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from brainfeed.models import Article, ArticleStatus, Category
from brainfeed.schemas.articles import ArticleFilters
from brainfeed.schemas.auth import SessionData
from brainfeed.services.errors import NotFoundError


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def list_articles(
    db: Session,
    filters: ArticleFilters,
    viewer: SessionData | None,
) -> list[Article]:
    """
    Return articles matching every set filter, newest first.

    Anonymous viewers only ever get approved articles; an explicit status filter
    is still applied on top, so anonymous status=pending yields nothing.
    An unknown category slug yields an empty list rather than being ignored.
    """
    stmt = select(Article)

    if filters.category:
        category_id = db.execute(
            select(Category.id).where(Category.slug == filters.category)
        ).scalar_one_or_none()
        if category_id is None:
            return []
        stmt = stmt.where(Article.category_id == category_id)

    if filters.featured is not None:
        stmt = stmt.where(Article.is_featured.is_(filters.featured))

    if filters.search:
        pattern = f"%{_escape_like(filters.search)}%"
        stmt = stmt.where(Article.title.ilike(pattern, escape="\\"))

    if filters.status:
        stmt = stmt.where(Article.status == filters.status)

    if filters.writer_id is not None:
        stmt = stmt.where(Article.writer_id == filters.writer_id)

    if viewer is None:
        stmt = stmt.where(Article.status == ArticleStatus.APPROVED.value)

    stmt = stmt.order_by(Article.published_at.desc(), Article.id.desc())
    return list(db.execute(stmt).scalars().all())


def get_article_by_slug(
    db: Session,
    slug: str,
    viewer: SessionData | None,
) -> Article:
    """
    Return the article with slug, or raise NotFoundError.

    A non-approved article requested without a session raises the same
    NotFoundError as a missing one.
    """
    article = db.execute(
        select(Article).where(Article.slug == slug)
    ).scalar_one_or_none()
    if article is None:
        raise NotFoundError("Article not found")
    if viewer is None and article.status != ArticleStatus.APPROVED.value:
        raise NotFoundError("Article not found")
    return article


def list_recent_approved(db: Session, limit: int = 3) -> list[Article]:
    """Most recent approved articles (used for chat suggestions)."""
    stmt = (
        select(Article)
        .where(Article.status == ArticleStatus.APPROVED.value)
        .order_by(Article.published_at.desc(), Article.id.desc())
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())
