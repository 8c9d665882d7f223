"""Review model definition."""

from enum import Enum
from typing import Dict, Any

from sqlalchemy import Column, Integer, Text, String, DateTime, ForeignKey

from .base import Base
from ..utils.timezone import now_utc

MIN_RATING = 1
MAX_RATING = 5

class ModerationStatus(str, Enum):
    """Review moderation lifecycle."""
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'
    FLAGGED = 'flagged'

class Review(Base):
    """
    A user's rating and comment on an event.

    At most one review exists per (event, user) pair; this is checked
    before insert rather than by a constraint.

    Fields:
        review_id: Unique identifier (auto-generated)
        event_id: Reviewed event
        user_id: Author of the review
        rating: Integer rating between 1 and 5
        review_text: Free-text body (optional)
        moderation_status: One of ModerationStatus
        moderation_notes: Notes left by the moderator (optional)
        moderated_by: Admin who last moderated the review (optional)
        moderated_at: When the review was last moderated (optional)
        created_at: When the review was submitted
        updated_at: When the review was last changed
    """
    __tablename__ = 'reviews'

    review_id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey('events.event_id'), nullable=False)
    user_id = Column(Integer, ForeignKey('users.user_id'), nullable=False)
    rating = Column(Integer, nullable=False)
    review_text = Column(Text)
    moderation_status = Column(String(20), nullable=False, default=ModerationStatus.PENDING.value)
    moderation_notes = Column(Text)
    moderated_by = Column(Integer, ForeignKey('users.user_id'))
    moderated_at = Column(DateTime)
    created_at = Column(DateTime, nullable=False, default=now_utc)
    updated_at = Column(DateTime, nullable=False, default=now_utc, onupdate=now_utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'review_id': self.review_id,
            'event_id': self.event_id,
            'user_id': self.user_id,
            'rating': self.rating,
            'review_text': self.review_text,
            'moderation_status': self.moderation_status,
            'moderation_notes': self.moderation_notes,
            'moderated_by': self.moderated_by,
            'moderated_at': self.moderated_at,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }

    def __str__(self) -> str:
        return f"Review(review_id={self.review_id}, event_id={self.event_id}, rating={self.rating})"
