"""Events router module."""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ...auth import TokenPayload
from ...db import ListQuery, PageRequest, SortOrder
from ...db.pagination import parse_optional_int
from ...db.sorting import EventSortField, EventReviewSortField
from ...models import Event, EventCategory, Review, User
from ...schemas.event import EventCreate, EventUpdate
from ...schemas.review import ReviewCreate
from ...utils.timezone import now_utc, ensure_naive_utc, start_of_today
from ..dependencies import ResourceId, authenticate_jwt, ensure_owner_or_admin, get_session, require_admin
from ..errors import APIError, ErrorKind
from ..responses import paginated
from .reviews import create_review_for_event, review_row_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])

UPCOMING_EVENTS_LIMIT = 5
PAST_EVENTS_LIMIT = 10

# NOT NULL columns that a partial update may not clear
REQUIRED_EVENT_FIELDS = ("event_date", "attendee_count")

EVENT_LISTING = ListQuery(
    entity=Event,
    primary_key=Event.event_id,
    default_sort=Event.created_at,
    default_order=SortOrder.DESC,
    sort_fields=EventSortField,
    sort_columns={
        EventSortField.NAME: Event.name,
        EventSortField.EVENT_DATE: Event.event_date,
        EventSortField.CATEGORY_ID: Event.category_id,
    },
)

EVENT_REVIEW_LISTING = ListQuery(
    entity=Review,
    primary_key=Review.review_id,
    default_sort=Review.created_at,
    default_order=SortOrder.DESC,
    sort_fields=EventReviewSortField,
    sort_columns={
        EventReviewSortField.CREATED_AT: Review.created_at,
        EventReviewSortField.RATING: Review.rating,
    },
)

UPCOMING_LISTING = ListQuery(
    entity=Event,
    primary_key=Event.event_id,
    default_sort=Event.event_date,
    default_order=SortOrder.ASC,
)

PAST_LISTING = ListQuery(
    entity=Event,
    primary_key=Event.event_id,
    default_sort=Event.event_date,
    default_order=SortOrder.DESC,
)

REVIEW_COUNT = (
    select(func.count(Review.review_id))
    .where(Review.event_id == Event.event_id)
    .correlate(Event)
    .scalar_subquery()
    .label('review_count')
)

AVERAGE_RATING = (
    select(func.avg(Review.rating))
    .where(Review.event_id == Event.event_id)
    .correlate(Event)
    .scalar_subquery()
    .label('avg_rating')
)

def ensure_category_exists(session: Session, category_id: int) -> None:
    if not session.query(EventCategory.category_id).filter(EventCategory.category_id == category_id).first():
        raise APIError(ErrorKind.NOT_FOUND, "Category not found")

def get_event_or_404(session: Session, event_id: int) -> Event:
    event = session.query(Event).filter(Event.event_id == event_id).first()
    if not event:
        raise APIError(ErrorKind.NOT_FOUND, "Event not found")
    return event

@router.get("/events", response_model=Dict)
def list_events(
    response: Response,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    category_id: Optional[str] = None,
    user_id: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """List events, one page at a time."""
    conditions = []
    category = parse_optional_int(category_id)
    if category is not None:
        conditions.append(Event.category_id == category)
    owner = parse_optional_int(user_id)
    if owner is not None:
        conditions.append(Event.user_id == owner)

    events, page_info = EVENT_LISTING.run(
        session,
        PageRequest.from_query(page, limit),
        conditions=conditions,
        sort=EVENT_LISTING.sort_spec(sort_by, sort_order),
    )
    return paginated(response, [event.to_dict() for event in events], page_info)

@router.get("/events/upcoming", response_model=Dict)
def get_upcoming_events(
    response: Response,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Events from today on, soonest first."""
    events, page_info = UPCOMING_LISTING.run(
        session,
        PageRequest.from_query(page, limit, default_limit=UPCOMING_EVENTS_LIMIT),
        conditions=[Event.event_date >= start_of_today()],
    )
    return paginated(response, [event.to_dict() for event in events], page_info)

@router.get("/events/past", response_model=Dict)
def get_past_events(
    response: Response,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Past events, most recent first, with their review count and average rating."""
    rows, page_info = PAST_LISTING.run(
        session,
        PageRequest.from_query(page, limit, default_limit=PAST_EVENTS_LIMIT),
        conditions=[Event.event_date < start_of_today()],
        extra_columns=[REVIEW_COUNT, AVERAGE_RATING],
    )
    data = []
    for event, count, average in rows:
        item = event.to_dict()
        item['review_count'] = count or 0
        item['avg_rating'] = round(float(average), 2) if average is not None else None
        data.append(item)
    return paginated(response, data, page_info)

@router.get("/events/{event_id}", response_model=Dict)
def get_event(event_id: ResourceId, session: Session = Depends(get_session)):
    """Get a single event by ID."""
    return get_event_or_404(session, event_id).to_dict()

@router.post("/events", status_code=201, response_model=Dict)
def create_event(
    payload: EventCreate,
    user: TokenPayload = Depends(require_admin),
    session: Session = Depends(get_session)
):
    """Create an event. Admin only."""
    if not payload.name or payload.category_id is None or payload.event_date is None:
        raise APIError(ErrorKind.VALIDATION_ERROR, "Name, category_id, and event_date are required")
    ensure_category_exists(session, payload.category_id)

    event = Event(
        user_id=user.user_id,
        category_id=payload.category_id,
        name=payload.name,
        description=payload.description,
        event_date=payload.event_date,
        location=payload.location,
        event_type=payload.event_type,
        attendee_count=payload.attendee_count,
        image_url=payload.image_url,
    )
    session.add(event)
    session.flush()
    logger.info(f"User {user.user_id} created event {event.event_id}")
    return event.to_dict()

@router.put("/events/{event_id}", response_model=Dict)
def update_event(
    event_id: ResourceId,
    payload: EventUpdate,
    user: TokenPayload = Depends(authenticate_jwt),
    session: Session = Depends(get_session)
):
    """Partially update an event. Owner or admin."""
    event = get_event_or_404(session, event_id)
    ensure_owner_or_admin(user, event.user_id, "You can only edit your own events")

    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise APIError(ErrorKind.VALIDATION_ERROR, "No fields to update")
    if 'name' in changes and not changes['name']:
        raise APIError(ErrorKind.VALIDATION_ERROR, "Name cannot be empty")
    for field in REQUIRED_EVENT_FIELDS:
        if field in changes and changes[field] is None:
            raise APIError(ErrorKind.VALIDATION_ERROR, f"{field} cannot be empty")
    if changes.get('category_id') is not None:
        ensure_category_exists(session, changes['category_id'])

    for field, value in changes.items():
        if field == 'event_date':
            value = ensure_naive_utc(value)
        setattr(event, field, value)
    event.updated_at = now_utc()
    session.flush()
    return event.to_dict()

@router.delete("/events/{event_id}", status_code=204)
def delete_event(
    event_id: ResourceId,
    user: TokenPayload = Depends(authenticate_jwt),
    session: Session = Depends(get_session)
):
    """Delete an event and its reviews. Owner or admin."""
    event = get_event_or_404(session, event_id)
    ensure_owner_or_admin(user, event.user_id, "You can only delete your own events")

    deleted_reviews = session.query(Review).filter(Review.event_id == event_id).delete(synchronize_session=False)
    session.delete(event)
    logger.info(f"User {user.user_id} deleted event {event_id} with {deleted_reviews} reviews")
    return Response(status_code=204)

@router.get("/events/{event_id}/reviews", response_model=Dict)
def list_event_reviews(
    event_id: ResourceId,
    response: Response,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """List the reviews of one event, with the author's username."""
    get_event_or_404(session, event_id)
    rows, page_info = EVENT_REVIEW_LISTING.run(
        session,
        PageRequest.from_query(page, limit),
        conditions=[Review.event_id == event_id],
        sort=EVENT_REVIEW_LISTING.sort_spec(sort_by, sort_order),
        extra_columns=[User.username],
        joins=[(User, Review.user_id == User.user_id)],
    )
    return paginated(response, [review_row_to_dict(row) for row in rows], page_info)

@router.post("/events/{event_id}/reviews", status_code=201, response_model=Dict)
def create_event_review(
    event_id: ResourceId,
    payload: ReviewCreate,
    user: TokenPayload = Depends(authenticate_jwt),
    session: Session = Depends(get_session)
):
    """Review an event. Same rules as POST /reviews."""
    return create_review_for_event(session, user, event_id, payload)
