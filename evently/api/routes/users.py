"""User profile and administration routes."""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...auth import TokenPayload, hash_password, verify_password
from ...db import ListQuery, PageRequest, SortOrder
from ...models import Event, Review, User, UserRole
from ...schemas.user import PasswordChange, ProfileUpdate, RoleUpdate
from ..dependencies import ResourceId, authenticate_jwt, get_session, require_admin
from ..errors import APIError, ErrorKind
from ..responses import paginated

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

MIN_PASSWORD_LENGTH = 6
ACTIVITY_SOURCE_LIMIT = 5
ACTIVITY_LIMIT = 10

USER_LISTING = ListQuery(
    entity=User,
    primary_key=User.user_id,
    default_sort=User.created_at,
    default_order=SortOrder.DESC,
)

def get_user_or_404(session: Session, user_id: int) -> User:
    user = session.query(User).filter(User.user_id == user_id).first()
    if not user:
        raise APIError(ErrorKind.NOT_FOUND, "User not found")
    return user

@router.get("", response_model=Dict)
def list_users(
    response: Response,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    search: Optional[str] = None,
    role: Optional[str] = None,
    admin: TokenPayload = Depends(require_admin),
    session: Session = Depends(get_session)
):
    """List user accounts, optionally filtered by a username/email substring and role. Admin only."""
    conditions = []
    if search and search.strip():
        pattern = f"%{search.strip()}%"
        conditions.append(or_(User.username.ilike(pattern), User.email.ilike(pattern)))
    if role and role != 'all':
        conditions.append(User.role == role)

    users, page_info = USER_LISTING.run(
        session,
        PageRequest.from_query(page, limit),
        conditions=conditions,
    )
    return paginated(response, [user.to_dict() for user in users], page_info)

@router.get("/profile", response_model=Dict)
def get_profile(
    user: TokenPayload = Depends(authenticate_jwt),
    session: Session = Depends(get_session)
):
    return get_user_or_404(session, user.user_id).to_dict()

@router.put("/profile", response_model=Dict)
def update_profile(
    payload: ProfileUpdate,
    user: TokenPayload = Depends(authenticate_jwt),
    session: Session = Depends(get_session)
):
    """Update email, bio or profile picture reference."""
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise APIError(ErrorKind.VALIDATION_ERROR, "No fields to update provided")

    email = changes.get('email')
    if 'email' in changes:
        if not email or '@' not in email:
            raise APIError(ErrorKind.VALIDATION_ERROR, "Invalid email format")
        taken = (
            session.query(User.user_id)
            .filter(User.email == email, User.user_id != user.user_id)
            .first()
        )
        if taken:
            raise APIError(ErrorKind.CONFLICT, "Email already registered")

    account = get_user_or_404(session, user.user_id)
    for field, value in changes.items():
        setattr(account, field, value)
    session.flush()
    return account.to_dict()

@router.put("/password", response_model=Dict)
def change_password(
    payload: PasswordChange,
    user: TokenPayload = Depends(authenticate_jwt),
    session: Session = Depends(get_session)
):
    if not payload.current_password or not payload.new_password:
        raise APIError(ErrorKind.VALIDATION_ERROR, "Current password and new password are required")
    if len(payload.new_password) < MIN_PASSWORD_LENGTH:
        raise APIError(
            ErrorKind.VALIDATION_ERROR,
            f"New password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

    account = get_user_or_404(session, user.user_id)
    if not verify_password(payload.current_password, account.password_hash):
        raise APIError(ErrorKind.UNAUTHORIZED, "Current password is incorrect")

    account.password_hash = hash_password(payload.new_password)
    logger.info(f"User {user.user_id} changed their password")
    return {"message": "Password updated successfully"}

@router.get("/activities", response_model=Dict)
def get_activities(
    user: TokenPayload = Depends(authenticate_jwt),
    session: Session = Depends(get_session)
):
    """The caller's most recent events created and reviews submitted, newest first."""
    created_events = (
        session.query(Event)
        .filter(Event.user_id == user.user_id)
        .order_by(Event.created_at.desc(), Event.event_id.desc())
        .limit(ACTIVITY_SOURCE_LIMIT)
        .all()
    )
    submitted_reviews = (
        session.query(Review, Event.name)
        .join(Event, Review.event_id == Event.event_id)
        .filter(Review.user_id == user.user_id)
        .order_by(Review.created_at.desc(), Review.review_id.desc())
        .limit(ACTIVITY_SOURCE_LIMIT)
        .all()
    )

    activities = [
        {
            'activity_type': 'event_created',
            'event_id': event.event_id,
            'name': event.name,
            'event_date': event.event_date,
            'created_at': event.created_at,
        }
        for event in created_events
    ]
    activities.extend(
        {
            'activity_type': 'review_submitted',
            'review_id': review.review_id,
            'event_id': review.event_id,
            'name': event_name,
            'rating': review.rating,
            'created_at': review.created_at,
        }
        for review, event_name in submitted_reviews
    )
    activities.sort(key=lambda activity: activity['created_at'], reverse=True)
    return {"data": activities[:ACTIVITY_LIMIT]}

@router.put("/{user_id}/role", response_model=Dict)
def update_user_role(
    user_id: ResourceId,
    payload: RoleUpdate,
    admin: TokenPayload = Depends(require_admin),
    session: Session = Depends(get_session)
):
    """Promote or demote a user. Admin only."""
    if not payload.role:
        raise APIError(ErrorKind.VALIDATION_ERROR, "Role is required")
    try:
        role = UserRole(payload.role)
    except ValueError:
        raise APIError(ErrorKind.VALIDATION_ERROR, "Invalid role specified")

    if user_id == admin.user_id and role is not UserRole.ADMIN:
        raise APIError(ErrorKind.FORBIDDEN, "Administrators cannot demote themselves")

    account = get_user_or_404(session, user_id)
    account.role = role.value
    session.flush()
    logger.info(f"Admin {admin.user_id} set role of user {user_id} to {role.value}")
    return account.to_dict()
