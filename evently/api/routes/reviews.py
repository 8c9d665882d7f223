"""Reviews router module."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy import case, func
from sqlalchemy.orm import Session

from ...auth import TokenPayload
from ...db import ListQuery, PageRequest, SortOrder
from ...db.pagination import parse_optional_int
from ...db.sorting import ReviewSortField
from ...models import Event, Review, User, ModerationStatus, MIN_RATING, MAX_RATING
from ...schemas.review import ReviewCreate, ReviewUpdate, ReviewModeration
from ...utils.timezone import now_utc
from ..dependencies import ResourceId, authenticate_jwt, ensure_owner_or_admin, get_session, require_admin
from ..errors import APIError, ErrorKind
from ..responses import paginated

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reviews"])

RECENT_REVIEWS_LIMIT = 5

REVIEW_LISTING = ListQuery(
    entity=Review,
    primary_key=Review.review_id,
    default_sort=Review.created_at,
    default_order=SortOrder.DESC,
    sort_fields=ReviewSortField,
    sort_columns={
        ReviewSortField.CREATED_AT: Review.created_at,
        ReviewSortField.RATING: Review.rating,
        ReviewSortField.EVENT_ID: Review.event_id,
        ReviewSortField.USER_ID: Review.user_id,
    },
)

def parse_moderation_status(value: Optional[str]) -> Optional[ModerationStatus]:
    if not value:
        return None
    try:
        return ModerationStatus(value.strip().lower())
    except ValueError:
        return None

def review_row_to_dict(row: Any) -> Dict[str, Any]:
    """Flatten a (Review, username[, event_name]) row."""
    review, username, *rest = row
    data = review.to_dict()
    data['username'] = username
    if rest:
        data['event_name'] = rest[0]
    return data

def validate_rating(rating: Optional[int]) -> None:
    if rating is None or rating < MIN_RATING or rating > MAX_RATING:
        raise APIError(ErrorKind.VALIDATION_ERROR, f"Rating must be between {MIN_RATING} and {MAX_RATING}.")

def get_review_or_404(session: Session, review_id: int) -> Review:
    review = session.query(Review).filter(Review.review_id == review_id).first()
    if not review:
        raise APIError(ErrorKind.NOT_FOUND, "Review not found")
    return review

def _load_review_with_username(session: Session, review_id: int) -> Dict[str, Any]:
    row = (
        session.query(Review, User.username)
        .join(User, Review.user_id == User.user_id)
        .filter(Review.review_id == review_id)
        .one()
    )
    return review_row_to_dict(row)

def create_review_for_event(
    session: Session,
    user: TokenPayload,
    event_id: Optional[int],
    payload: ReviewCreate
) -> Dict[str, Any]:
    """Create the caller's review of an event.

    One review per user per event; the check runs inside the request's
    transaction, right before the insert.
    """
    if event_id is None:
        raise APIError(ErrorKind.VALIDATION_ERROR, "event_id is required")
    validate_rating(payload.rating)

    if not session.query(Event.event_id).filter(Event.event_id == event_id).first():
        raise APIError(ErrorKind.NOT_FOUND, "Event not found")

    existing = (
        session.query(Review.review_id)
        .filter(Review.event_id == event_id, Review.user_id == user.user_id)
        .first()
    )
    if existing:
        raise APIError(ErrorKind.CONFLICT, "You have already reviewed this event.")

    review = Review(
        event_id=event_id,
        user_id=user.user_id,
        rating=payload.rating,
        review_text=payload.review_text,
        moderation_status=ModerationStatus.PENDING.value,
    )
    session.add(review)
    session.flush()
    logger.info(f"User {user.user_id} reviewed event {event_id} with rating {payload.rating}")
    return _load_review_with_username(session, review.review_id)

@router.get("/reviews", response_model=Dict)
def list_reviews(
    response: Response,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    event_id: Optional[str] = None,
    user_id: Optional[str] = None,
    min_rating: Optional[str] = None,
    max_rating: Optional[str] = None,
    status: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    user: TokenPayload = Depends(authenticate_jwt),
    session: Session = Depends(get_session)
):
    """List reviews with filtering, sorting and pagination."""
    conditions = []
    filters = (
        (parse_optional_int(event_id), lambda value: Review.event_id == value),
        (parse_optional_int(user_id), lambda value: Review.user_id == value),
        (parse_optional_int(min_rating), lambda value: Review.rating >= value),
        (parse_optional_int(max_rating), lambda value: Review.rating <= value),
    )
    for value, condition in filters:
        if value is not None:
            conditions.append(condition(value))

    moderation_status = parse_moderation_status(status)
    if moderation_status is not None:
        conditions.append(Review.moderation_status == moderation_status.value)

    rows, page_info = REVIEW_LISTING.run(
        session,
        PageRequest.from_query(page, limit),
        conditions=conditions,
        sort=REVIEW_LISTING.sort_spec(sort_by, sort_order),
        extra_columns=[User.username, Event.name],
        joins=[
            (User, Review.user_id == User.user_id),
            (Event, Review.event_id == Event.event_id),
        ],
    )
    return paginated(response, [review_row_to_dict(row) for row in rows], page_info)

@router.post("/reviews", status_code=201, response_model=Dict)
def create_review(
    payload: ReviewCreate,
    user: TokenPayload = Depends(authenticate_jwt),
    session: Session = Depends(get_session)
):
    """Review an event."""
    return create_review_for_event(session, user, payload.event_id, payload)

@router.get("/reviews/analytics", response_model=Dict)
def get_review_analytics(
    event_id: Optional[str] = None,
    user: TokenPayload = Depends(authenticate_jwt),
    session: Session = Depends(get_session)
):
    """Rating distribution and the most recent reviews, overall or for one event."""
    target_event = parse_optional_int(event_id)

    def stars(value: int):
        return func.count(case((Review.rating == value, 1)))

    query = session.query(
        func.count(Review.review_id),
        func.avg(Review.rating),
        stars(5),
        stars(4),
        stars(3),
        stars(2),
        stars(1),
        func.count(case((Review.rating >= 4, 1))),
        func.count(case((Review.rating <= 2, 1))),
    )
    recent_query = session.query(Review, User.username).join(User, Review.user_id == User.user_id)
    if target_event is not None:
        query = query.filter(Review.event_id == target_event)
        recent_query = recent_query.filter(Review.event_id == target_event)

    total, average, five, four, three, two, one, positive, negative = query.one()
    recent = (
        recent_query
        .order_by(Review.created_at.desc(), Review.review_id.desc())
        .limit(RECENT_REVIEWS_LIMIT)
        .all()
    )
    return {
        "analytics": {
            "total_reviews": total,
            "average_rating": round(float(average), 2) if average is not None else None,
            "five_star": five,
            "four_star": four,
            "three_star": three,
            "two_star": two,
            "one_star": one,
            "positive_reviews": positive,
            "negative_reviews": negative,
        },
        "recent_reviews": [review_row_to_dict(row) for row in recent],
    }

@router.put("/reviews/{review_id}", response_model=Dict)
def update_review(
    review_id: ResourceId,
    payload: ReviewUpdate,
    user: TokenPayload = Depends(authenticate_jwt),
    session: Session = Depends(get_session)
):
    """Change the rating or text of a review. Author or admin."""
    changes = payload.model_dump(exclude_unset=True)
    if 'rating' in changes:
        validate_rating(changes['rating'])

    review = get_review_or_404(session, review_id)
    ensure_owner_or_admin(user, review.user_id, "You can only edit your own reviews")

    if not changes:
        raise APIError(ErrorKind.VALIDATION_ERROR, "No fields to update")
    for field, value in changes.items():
        setattr(review, field, value)
    review.updated_at = now_utc()
    session.flush()
    return _load_review_with_username(session, review_id)

@router.put("/reviews/{review_id}/moderate", response_model=Dict)
def moderate_review(
    review_id: ResourceId,
    payload: ReviewModeration,
    admin: TokenPayload = Depends(require_admin),
    session: Session = Depends(get_session)
):
    """Set a review's moderation status. Admin only."""
    moderation_status = parse_moderation_status(payload.status)
    if moderation_status is None:
        allowed = ", ".join(status.value for status in ModerationStatus)
        raise APIError(ErrorKind.VALIDATION_ERROR, f"Status must be one of: {allowed}")

    review = get_review_or_404(session, review_id)
    review.moderation_status = moderation_status.value
    review.moderation_notes = payload.moderation_notes
    review.moderated_by = admin.user_id
    review.moderated_at = now_utc()
    session.flush()
    logger.info(f"Admin {admin.user_id} marked review {review_id} as {moderation_status.value}")
    return _load_review_with_username(session, review_id)

@router.delete("/reviews/{review_id}", status_code=204)
def delete_review(
    review_id: ResourceId,
    user: TokenPayload = Depends(authenticate_jwt),
    session: Session = Depends(get_session)
):
    """Delete a review. Author or admin."""
    review = get_review_or_404(session, review_id)
    ensure_owner_or_admin(user, review.user_id, "You can only delete your own reviews")
    session.delete(review)
    return Response(status_code=204)
