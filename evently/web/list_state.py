"""Pagination state for one list view.

A view asks its ``ListState`` for a request token before each fetch and
hands the token back with the result. Only the result of the most recently
issued request is applied; a slower, older response that arrives later is
dropped so it cannot overwrite newer state.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import requests

from .api import APIClientError, Page

logger = logging.getLogger(__name__)

@dataclass
class ListState:
    page: int = 1
    limit: int = 10
    total: int = 0
    pages: int = 0
    items: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None
    _latest_token: int = field(default=0, repr=False)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    def begin_request(self) -> int:
        """Issue a token for a new fetch, superseding every earlier one."""
        self._latest_token += 1
        return self._latest_token

    def is_current(self, token: int) -> bool:
        return token == self._latest_token

    def apply_page(self, token: int, page: Page) -> bool:
        """Replace the displayed page. Returns False if the response was stale."""
        if not self.is_current(token):
            logger.debug(f"Dropping stale list response (token {token}, latest {self._latest_token})")
            return False
        self.items = list(page.items)
        self.page = page.info.page
        self.limit = page.info.limit
        self.total = page.info.total
        self.pages = page.info.pages
        self.error = None
        return True

    def apply_error(self, token: int, message: str) -> bool:
        """Record a failed fetch. The previously displayed page stays."""
        if not self.is_current(token):
            return False
        self.error = message
        return True

class ListView:
    """Drives one paginated list: current filters, page navigation and fetching.

    Args:
        fetch: Callable taking (page, limit, **filters) and returning a Page,
               e.g. ``EventlyAPIClient.get_events``
        limit: Initial page size
        filters: Initial filter and sort parameters
    """

    def __init__(
        self,
        fetch: Callable[..., Page],
        limit: int = 10,
        filters: Optional[Dict[str, Any]] = None
    ):
        self.fetch = fetch
        self.filters = {key: value for key, value in (filters or {}).items() if value is not None}
        self.state = ListState(limit=limit)

    def load(self, page: Optional[int] = None) -> bool:
        """Fetch a page (the current one by default). Returns True if it was applied."""
        target = page if page is not None else self.state.page
        token = self.state.begin_request()
        try:
            result = self.fetch(target, self.state.limit, **self.filters)
        except APIClientError as e:
            return self.state.apply_error(token, e.message)
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Failed to load list page {target}: {e}")
            return self.state.apply_error(token, "Could not load data. Please try again.")
        return self.state.apply_page(token, result)

    def next_page(self) -> bool:
        if not self.state.has_next:
            return False
        return self.load(self.state.page + 1)

    def previous_page(self) -> bool:
        if not self.state.has_previous:
            return False
        return self.load(self.state.page - 1)

    def set_filters(self, **filters: Any) -> bool:
        """Change filters and go back to the first page."""
        self.filters.update(filters)
        self.filters = {key: value for key, value in self.filters.items() if value is not None}
        return self.load(1)

    def set_limit(self, limit: int) -> bool:
        """Change the page size and go back to the first page."""
        self.state.limit = limit
        return self.load(1)
