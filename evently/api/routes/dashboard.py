"""Dashboard statistics route."""

from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from ...auth import TokenPayload
from ...models import Event
from ...utils.timezone import start_of_today
from ..dependencies import authenticate_jwt, get_session

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

@router.get("/stats", response_model=Dict)
def get_stats(
    user: TokenPayload = Depends(authenticate_jwt),
    session: Session = Depends(get_session)
):
    """Event totals for the dashboard header."""
    today = start_of_today()
    total = session.query(func.count(Event.event_id)).scalar() or 0
    upcoming = session.query(func.count(Event.event_id)).filter(Event.event_date >= today).scalar() or 0
    return {
        "total_events": total,
        "upcoming_events": upcoming,
        "completed_events": total - upcoming,
    }
