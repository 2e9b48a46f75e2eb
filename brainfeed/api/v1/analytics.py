"""Analytics endpoints: event tracking (public) and the dashboard summary (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from brainfeed.api.v1.auth import require_admin
from brainfeed.core.database import get_db
from brainfeed.schemas.analytics import (
    DashboardResponse,
    TrackEventRequest,
    TrackEventResponse,
)
from brainfeed.schemas.auth import SessionData
from brainfeed.services.analytics import build_dashboard, track_event

router = APIRouter()


@router.post("/track", response_model=TrackEventResponse, status_code=status.HTTP_201_CREATED)
def post_track(
    body: TrackEventRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TrackEventResponse:
    track_event(db, body)
    return TrackEventResponse()


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[SessionData, Depends(require_admin)],
    days: Annotated[int, Query(ge=1, le=365)] = 30,
) -> DashboardResponse:
    """Event counts over the last `days` days (admin only)."""
    return build_dashboard(db, days)
