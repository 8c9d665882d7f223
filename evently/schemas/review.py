from pydantic import BaseModel, Field
from typing import Optional

from ..db.pagination import SQL_INT_MAX

class ReviewCreate(BaseModel):
    # event_id comes from the path on /events/{event_id}/reviews
    event_id: Optional[int] = Field(None, ge=1, le=SQL_INT_MAX)
    # Range is checked by the route so out-of-range values give a 400
    rating: Optional[int] = None
    review_text: Optional[str] = None

class ReviewUpdate(BaseModel):
    rating: Optional[int] = None
    review_text: Optional[str] = None

class ReviewModeration(BaseModel):
    status: Optional[str] = None
    moderation_notes: Optional[str] = None
