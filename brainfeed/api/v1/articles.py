"""Article endpoints: public listing/lookup, writer submission, admin moderation, click counting."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from brainfeed.api.v1.auth import get_session, require_admin, require_writer_or_admin
from brainfeed.core.database import get_db
from brainfeed.schemas.articles import (
    ArticleCreate,
    ArticleCreated,
    ArticleFilters,
    ArticleOut,
    ClickResponse,
    StatusUpdate,
    StatusUpdated,
)
from brainfeed.schemas.auth import SessionData
from brainfeed.services.articles import get_article_by_slug, list_articles
from brainfeed.services.moderation import decide_article, record_click, submit_article

router = APIRouter()

# Primary keys are 32-bit INTEGER columns
ArticleId = Annotated[int, Path(ge=1, le=2**31 - 1)]


@router.get("", response_model=list[ArticleOut])
def get_articles(
    db: Annotated[Session, Depends(get_db)],
    session: Annotated[SessionData | None, Depends(get_session)],
    category: Annotated[str | None, Query(description="Category slug")] = None,
    featured: bool | None = None,
    search: Annotated[str | None, Query(max_length=255)] = None,
    status_filter: Annotated[
        str | None,
        Query(alias="status", pattern="^(pending|approved|rejected)$"),
    ] = None,
    writer_id: Annotated[int | None, Query(alias="writerId")] = None,
) -> list[ArticleOut]:
    """
    List articles, newest first. All filters are optional and combined with AND.

    Without a session only approved articles are returned.
    """
    filters = ArticleFilters(
        category=category or None,
        featured=featured,
        search=search or None,
        status=status_filter or None,
        writer_id=writer_id,
    )
    articles = list_articles(db, filters, viewer=session)
    return [ArticleOut.model_validate(a) for a in articles]


@router.post("", response_model=ArticleCreated, status_code=status.HTTP_201_CREATED)
def create_article(
    body: ArticleCreate,
    db: Annotated[Session, Depends(get_db)],
    session: Annotated[SessionData, Depends(require_writer_or_admin)],
) -> ArticleCreated:
    """Submit a new article for review; it starts as pending."""
    article = submit_article(db, body, session)
    return ArticleCreated(id=article.id)


@router.get("/{slug}", response_model=ArticleOut)
def get_article(
    slug: str,
    db: Annotated[Session, Depends(get_db)],
    session: Annotated[SessionData | None, Depends(get_session)],
) -> ArticleOut:
    """Fetch one article by slug. Non-approved articles are a 404 without a session."""
    return ArticleOut.model_validate(get_article_by_slug(db, slug, viewer=session))


@router.patch("/{article_id}/status", response_model=StatusUpdated)
def update_article_status(
    article_id: ArticleId,
    body: StatusUpdate,
    db: Annotated[Session, Depends(get_db)],
    session: Annotated[SessionData, Depends(require_admin)],
) -> StatusUpdated:
    """Approve or reject a pending article (admin only)."""
    article = decide_article(db, article_id, body.status, session)
    return StatusUpdated(
        id=article.id,
        status=article.status,
        message=f"Article {article.status} successfully",
    )


@router.post("/{article_id}/click", response_model=ClickResponse)
def click_article(
    article_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> ClickResponse:
    """Count a click. Always reports success; counting failures are only logged."""
    record_click(db, article_id)
    return ClickResponse()
