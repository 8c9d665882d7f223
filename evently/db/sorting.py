"""Sort allow-lists for list queries.

Every sortable field is an enum member mapped to a column object, so a
client-supplied `sort_by` never reaches the SQL text. Unknown tokens parse to
None and the caller's default ordering applies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Type, TypeVar

class SortOrder(str, Enum):
    ASC = 'asc'
    DESC = 'desc'

    @classmethod
    def parse(cls, value: Optional[str], default: 'SortOrder') -> 'SortOrder':
        """Case-insensitive parse; anything unrecognized gives the default."""
        if not value:
            return default
        try:
            return cls(value.strip().lower())
        except ValueError:
            return default

class EventSortField(str, Enum):
    NAME = 'name'
    EVENT_DATE = 'event_date'
    CATEGORY_ID = 'category_id'

class CategorySortField(str, Enum):
    NAME = 'name'

class ReviewSortField(str, Enum):
    CREATED_AT = 'created_at'
    RATING = 'rating'
    EVENT_ID = 'event_id'
    USER_ID = 'user_id'

class EventReviewSortField(str, Enum):
    CREATED_AT = 'created_at'
    RATING = 'rating'

E = TypeVar('E', bound=Enum)

def parse_sort_field(fields: Type[E], value: Optional[str]) -> Optional[E]:
    """Look a `sort_by` token up in an allow-list enum."""
    if not value:
        return None
    try:
        return fields(value.strip())
    except ValueError:
        return None

@dataclass(frozen=True)
class SortSpec:
    """A validated ORDER BY: one column plus the primary key as tiebreaker."""

    column: Any
    order: SortOrder
    tiebreaker: Any = None

    def clauses(self) -> List[Any]:
        columns = [self.column]
        if self.tiebreaker is not None and self.tiebreaker is not self.column:
            columns.append(self.tiebreaker)
        if self.order is SortOrder.ASC:
            return [column.asc() for column in columns]
        return [column.desc() for column in columns]
