"""Pagination parameters and metadata for list queries.

Query-string values arrive untrusted. They are coerced rather than rejected:
anything that is not a positive integer falls back to the default, and the
page size is capped at MAX_PAGE_SIZE. Integers outside the range of a 32-bit
SQL INTEGER never reach the database: filters treat them as malformed and the
page number is clamped.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_PAGE_SIZE = 100

# Largest value of an INTEGER column in PostgreSQL (and of our id columns)
SQL_INT_MAX = 2**31 - 1

# Response headers carrying the pagination metadata
TOTAL_COUNT_HEADER = 'X-Total-Count'
TOTAL_PAGES_HEADER = 'X-Total-Pages'
CURRENT_PAGE_HEADER = 'X-Current-Page'
PER_PAGE_HEADER = 'X-Per-Page'

def _to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None

def parse_optional_int(value: Any) -> Optional[int]:
    """Parse an integer query value, returning None when it is missing, malformed or out of range."""
    parsed = _to_int(value)
    if parsed is None or abs(parsed) > SQL_INT_MAX:
        return None
    return parsed

def parse_positive_int(value: Any, default: int, maximum: int = SQL_INT_MAX) -> int:
    """Parse a positive integer, falling back to default for anything else and clamping to maximum."""
    parsed = _to_int(value)
    if parsed is None or parsed < 1:
        return default
    return min(parsed, maximum)

@dataclass(frozen=True)
class PageRequest:
    """The window of rows a caller asked for."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(
        cls,
        page: Any = None,
        limit: Any = None,
        default_limit: int = DEFAULT_LIMIT
    ) -> 'PageRequest':
        """Build a request from raw query-string values."""
        return cls(
            page=parse_positive_int(page, DEFAULT_PAGE),
            limit=parse_positive_int(limit, default_limit, maximum=MAX_PAGE_SIZE),
        )

@dataclass(frozen=True)
class PageInfo:
    """Pagination metadata for one page of results."""

    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, request: PageRequest, total: int) -> 'PageInfo':
        return cls(
            page=request.page,
            limit=request.limit,
            total=total,
            pages=math.ceil(total / request.limit),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PageInfo':
        """Parse the `pagination` object of a list response.

        Raises:
            ValueError: If a field is missing or not an integer
        """
        try:
            return cls(
                page=int(data['page']),
                limit=int(data['limit']),
                total=int(data['total']),
                pages=int(data['pages']),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid pagination metadata: {data!r}") from e

    def to_dict(self) -> Dict[str, int]:
        return {
            'page': self.page,
            'limit': self.limit,
            'total': self.total,
            'pages': self.pages,
        }

    def headers(self) -> Dict[str, str]:
        """Response headers describing this page."""
        return {
            TOTAL_COUNT_HEADER: str(self.total),
            TOTAL_PAGES_HEADER: str(self.pages),
            CURRENT_PAGE_HEADER: str(self.page),
            PER_PAGE_HEADER: str(self.limit),
        }
