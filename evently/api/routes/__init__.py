"""Routes package initialization."""

from . import (
    auth,
    categories,
    dashboard,
    events,
    health,
    reviews,
    users
)

__all__ = [
    'auth',
    'categories',
    'dashboard',
    'events',
    'health',
    'reviews',
    'users'
]
