from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional

from ..db.pagination import SQL_INT_MAX

class EventCreate(BaseModel):
    # Required fields are checked by the route so the error message can name them together
    name: Optional[str] = None
    category_id: Optional[int] = Field(None, ge=1, le=SQL_INT_MAX)
    event_date: Optional[datetime] = None
    description: Optional[str] = None
    location: Optional[str] = None
    event_type: Optional[str] = None
    attendee_count: int = Field(0, ge=0, le=SQL_INT_MAX)
    image_url: Optional[str] = None

class EventUpdate(BaseModel):
    # An explicit null is only accepted for nullable columns; the route rejects the rest
    name: Optional[str] = None
    category_id: Optional[int] = Field(None, ge=1, le=SQL_INT_MAX)
    event_date: Optional[datetime] = None
    description: Optional[str] = None
    location: Optional[str] = None
    event_type: Optional[str] = None
    attendee_count: Optional[int] = Field(None, ge=0, le=SQL_INT_MAX)
    image_url: Optional[str] = None
