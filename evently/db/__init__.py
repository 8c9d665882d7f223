"""Database package initialization.

This module exposes the public interface of the database package.
"""

from .db_core import (
    Database,
    DatabaseConfig,
    DatabaseError,
    ConnectionError,
    SessionError,
)
from .pagination import PageRequest, PageInfo, MAX_PAGE_SIZE
from .sorting import SortOrder, SortSpec
from .listing import ListQuery

__all__ = [
    # Core database classes
    'Database',
    'DatabaseConfig',

    # Exceptions
    'DatabaseError',
    'ConnectionError',
    'SessionError',

    # List queries
    'PageRequest',
    'PageInfo',
    'MAX_PAGE_SIZE',
    'SortOrder',
    'SortSpec',
    'ListQuery',
]
