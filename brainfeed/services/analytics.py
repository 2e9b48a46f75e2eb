"""Usage analytics: record reader events and summarize them by simple counting."""

from collections import Counter
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from brainfeed.models import AnalyticsEvent, Article, Category
from brainfeed.schemas.analytics import (
    ChatEngagement,
    DashboardResponse,
    SearchTermCount,
    TopArticle,
    TopCategory,
    TrackEventRequest,
    UserBehavior,
)

TOP_N = 5


def track_event(db: Session, body: TrackEventRequest) -> AnalyticsEvent:
    metadata = (
        body.metadata.model_dump(by_alias=True, exclude_none=True)
        if body.metadata is not None
        else None
    )
    event = AnalyticsEvent(
        session_id=body.session_id,
        event=body.event,
        article_id=body.article_id,
        category_id=body.category_id,
        event_metadata=metadata or None,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def _average(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def build_dashboard(
    db: Session,
    days: int,
    now: datetime | None = None,
) -> DashboardResponse:
    """Summarize events newer than `days` days ago."""
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(days=days)
    events = list(
        db.execute(
            select(AnalyticsEvent).where(AnalyticsEvent.created_at > cutoff)
        ).scalars().all()
    )

    article_counts = Counter(e.article_id for e in events if e.article_id is not None)
    category_counts = Counter(e.category_id for e in events if e.category_id is not None)
    top_article_ids = [article_id for article_id, _ in article_counts.most_common(TOP_N)]
    top_category_ids = [category_id for category_id, _ in category_counts.most_common(TOP_N)]

    titles: dict[int, str] = {}
    if top_article_ids:
        titles = dict(
            db.execute(
                select(Article.id, Article.title).where(Article.id.in_(top_article_ids))
            ).all()
        )
    category_names: dict[int, str] = {}
    if top_category_ids:
        category_names = dict(
            db.execute(
                select(Category.id, Category.name).where(Category.id.in_(top_category_ids))
            ).all()
        )

    chat_events = [e for e in events if e.event == "chat"]
    chat_sessions = len({e.session_id for e in chat_events})
    avg_chat = len(chat_events) / chat_sessions if chat_sessions else 0.0

    metadata = [e.event_metadata for e in events if isinstance(e.event_metadata, dict)]
    scroll_depths = [float(m["scrollDepth"]) for m in metadata if "scrollDepth" in m]
    times_spent = [
        float(m["timeSpentSeconds"]) for m in metadata if "timeSpentSeconds" in m
    ]
    search_terms = Counter(
        m["searchTerm"].strip().lower()
        for m in metadata
        if isinstance(m.get("searchTerm"), str) and m["searchTerm"].strip()
    )

    return DashboardResponse(
        days=days,
        total_sessions=len({e.session_id for e in events}),
        total_events=len(events),
        top_articles=[
            TopArticle(id=article_id, title=titles.get(article_id, "Unknown"), views=count)
            for article_id, count in article_counts.most_common(TOP_N)
        ],
        top_categories=[
            TopCategory(
                id=category_id,
                name=category_names.get(category_id, "Unknown"),
                views=count,
            )
            for category_id, count in category_counts.most_common(TOP_N)
        ],
        event_breakdown=dict(Counter(e.event for e in events)),
        chat_engagement=ChatEngagement(
            total_chats=chat_sessions,
            average_messages_per_session=round(avg_chat, 2),
        ),
        user_behavior=UserBehavior(
            avg_time_per_article=round(_average(times_spent), 2),
            scroll_depth_avg=round(_average(scroll_depths)),
            top_search_terms=[
                SearchTermCount(term=term, count=count)
                for term, count in search_terms.most_common(TOP_N)
            ],
        ),
    )
