"""Event category model definition."""

from typing import Dict, Any

from sqlalchemy import Column, Integer, String, Text

from .base import Base

class EventCategory(Base):
    """
    Grouping used to classify events.

    Fields:
        category_id: Unique identifier (auto-generated)
        name: Category name, unique
        description: Optional longer description
    """
    __tablename__ = 'event_categories'

    category_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'category_id': self.category_id,
            'name': self.name,
            'description': self.description,
        }

    def __str__(self) -> str:
        return f"EventCategory(category_id={self.category_id}, name={self.name})"
