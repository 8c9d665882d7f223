"""Models package initialization."""

from .base import Base
from .user import User, UserRole
from .category import EventCategory
from .event import Event
from .review import Review, ModerationStatus, MIN_RATING, MAX_RATING

__all__ = [
    'Base',
    'User',
    'UserRole',
    'EventCategory',
    'Event',
    'Review',
    'ModerationStatus',
    'MIN_RATING',
    'MAX_RATING',
]
