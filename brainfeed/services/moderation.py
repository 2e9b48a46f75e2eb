"""Article moderation lifecycle: writer submission, admin decision, click counting."""

import logging
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from brainfeed.models import Article, ArticleStatus, Author, Category
from brainfeed.schemas.articles import ArticleCreate
from brainfeed.schemas.auth import SessionData
from brainfeed.services.authorization import Capability, ensure_authorized
from brainfeed.services.errors import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    SlugTakenError,
)

logger = logging.getLogger(__name__)

DEFAULT_READ_TIME = 5

REQUIRED_TEXT_FIELDS = ("title", "slug", "excerpt", "content", "cover_image")

DECISIONS = frozenset({ArticleStatus.APPROVED.value, ArticleStatus.REJECTED.value})


def _slug_taken(db: Session, slug: str) -> bool:
    return db.execute(
        select(Article.id).where(Article.slug == slug)
    ).first() is not None


def submit_article(
    db: Session,
    draft: ArticleCreate,
    session: SessionData | None,
) -> Article:
    """
    Create a pending article owned by the submitting writer.

    Raises AuthorizationError without a writer/admin session, InvalidInputError
    for blank fields or unknown category/author, SlugTakenError if the slug exists.
    """
    session = ensure_authorized(session, Capability.WRITER_OR_ADMIN)

    values = {name: getattr(draft, name).strip() for name in REQUIRED_TEXT_FIELDS}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise InvalidInputError(f"Missing required fields: {', '.join(missing)}")

    if db.get(Category, draft.category_id) is None:
        raise InvalidInputError(f"Unknown category id {draft.category_id}")
    if db.get(Author, draft.author_id) is None:
        raise InvalidInputError(f"Unknown author id {draft.author_id}")

    if _slug_taken(db, values["slug"]):
        raise SlugTakenError(f"An article with slug '{values['slug']}' already exists")

    article = Article(
        **values,
        category_id=draft.category_id,
        author_id=draft.author_id,
        writer_id=session.user_id,
        read_time=draft.read_time or DEFAULT_READ_TIME,
        is_featured=False,
        status=ArticleStatus.PENDING.value,
        clicks=0,
        published_at=datetime.now(timezone.utc),
    )
    db.add(article)
    try:
        db.commit()
    except IntegrityError as e:
        # Unique index on slug catches a concurrent submission with the same slug
        db.rollback()
        raise SlugTakenError(
            f"An article with slug '{values['slug']}' already exists"
        ) from e
    db.refresh(article)
    logger.info(
        "Article submitted",
        extra={"article_id": article.id, "slug": article.slug, "writer_id": session.user_id},
    )
    return article


def decide_article(
    db: Session,
    article_id: int,
    decision: str,
    session: SessionData | None,
) -> Article:
    """
    Move a pending article to approved or rejected.

    Only pending articles can be decided; the status check and the write are a
    single conditional UPDATE. Raises NotFoundError if the article does not exist
    and ConflictError if it was already decided.
    """
    session = ensure_authorized(session, Capability.ADMIN)
    if decision not in DECISIONS:
        raise InvalidInputError("Status must be 'approved' or 'rejected'")

    result = db.execute(
        update(Article)
        .where(
            Article.id == article_id,
            Article.status == ArticleStatus.PENDING.value,
        )
        .values(status=decision)
    )
    if result.rowcount == 0:
        db.rollback()
        current = db.execute(
            select(Article.status).where(Article.id == article_id)
        ).scalar_one_or_none()
        if current is None:
            raise NotFoundError("Article not found")
        raise ConflictError(f"Article is already {current}")
    db.commit()

    article = db.get(Article, article_id, populate_existing=True)
    if article is None:
        raise NotFoundError("Article not found")
    logger.info(
        "Article moderated",
        extra={"article_id": article_id, "status": decision, "admin_id": session.user_id},
    )
    return article


def record_click(db: Session, article_id: int) -> bool:
    """
    Increment the article's click counter in the database (clicks = clicks + 1).

    Never raises for storage failures: counting is best-effort and must not
    break the caller. Returns True when a row was updated.
    """
    try:
        result = db.execute(
            update(Article)
            .where(Article.id == article_id)
            .values(clicks=Article.clicks + 1)
        )
        db.commit()
    except (SQLAlchemyError, OverflowError):
        db.rollback()
        logger.warning(
            "Click increment failed",
            exc_info=True,
            extra={"article_id": article_id},
        )
        return False
    if result.rowcount == 0:
        logger.debug("Click for unknown article", extra={"article_id": article_id})
        return False
    return True
