"""Event model definition."""

from typing import Dict, Any

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey

from .base import Base
from ..utils.timezone import now_utc, ensure_naive_utc

class Event(Base):
    """
    Event model representing a scheduled event.

    Fields:
        event_id: Unique identifier (auto-generated)
        user_id: Owner of the event
        category_id: Category the event belongs to (optional)
        name: Event name
        description: Event description (optional)
        location: Where the event takes place (optional)
        event_date: When the event takes place
        event_type: Free-form type label, e.g. 'workshop' (optional)
        attendee_count: Expected or registered number of attendees
        image_url: Reference to the event's image (optional)
        created_at: When this event was first created in our database
        updated_at: When this event was last changed
    """
    __tablename__ = 'events'

    event_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.user_id'), nullable=False)
    category_id = Column(Integer, ForeignKey('event_categories.category_id'))
    name = Column(String(255), nullable=False)
    description = Column(Text)
    location = Column(String(255))
    event_date = Column(DateTime, nullable=False)
    event_type = Column(String(100))
    attendee_count = Column(Integer, nullable=False, default=0)
    image_url = Column(String(500))
    created_at = Column(DateTime, nullable=False, default=now_utc)
    updated_at = Column(DateTime, nullable=False, default=now_utc, onupdate=now_utc)

    def __init__(self, **kwargs):
        """Initialize Event, normalizing the event date to naive UTC."""
        if kwargs.get('event_date') is not None:
            kwargs['event_date'] = ensure_naive_utc(kwargs['event_date'])
        super().__init__(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'event_id': self.event_id,
            'user_id': self.user_id,
            'category_id': self.category_id,
            'name': self.name,
            'description': self.description,
            'location': self.location,
            'event_date': self.event_date,
            'event_type': self.event_type,
            'attendee_count': self.attendee_count,
            'image_url': self.image_url,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }

    def __str__(self) -> str:
        return f"Event(event_id={self.event_id}, name={self.name}, event_date={self.event_date})"
