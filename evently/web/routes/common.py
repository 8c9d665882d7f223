"""Helpers shared by the web blueprints."""

from typing import Optional

from flask import current_app, request, session

from ...db.pagination import parse_positive_int
from ..api import EventlyAPIClient

def get_client(token: Optional[str] = None) -> EventlyAPIClient:
    """An API client configured from the app, carrying the logged-in user's token."""
    return EventlyAPIClient(
        base_url=current_app.config['API_BASE_URL'],
        timeout=current_app.config['API_TIMEOUT'],
        token=token if token is not None else session.get('token'),
    )

def requested_page() -> int:
    return parse_positive_int(request.args.get('page'), 1)

def requested_limit(default: int) -> int:
    """Page size from the query string, restricted to the sizes the tables offer."""
    limit = parse_positive_int(request.args.get('limit'), default)
    if limit not in current_app.config['ADMIN_PAGE_SIZES']:
        return default
    return limit
