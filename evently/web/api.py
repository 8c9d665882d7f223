import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from ..db.pagination import PageInfo

logger = logging.getLogger(__name__)

class APIClientError(Exception):
    """Raised when the API answers with an error status.

    Carries the stable error kind from the response body when there is one.
    """

    def __init__(self, message: str, status_code: int, kind: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.kind = kind

@dataclass
class Page:
    """One page of a list endpoint."""
    items: List[Dict[str, Any]]
    info: PageInfo

@dataclass
class EventlyAPIClient:
    """Client for the Evently list and auth endpoints."""

    base_url: str
    timeout: int = 30
    token: Optional[str] = None
    default_headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self.base_url = self.base_url.rstrip('/')

    def _headers(self) -> Dict[str, str]:
        headers = {'Accept': 'application/json', **self.default_headers}
        if self.token:
            headers['Authorization'] = f"Bearer {self.token}"
        return headers

    def _raise_for_error(self, response: requests.Response) -> None:
        if response.status_code < 400:
            return
        message = f"HTTP {response.status_code}"
        kind = None
        try:
            body = response.json()
            if isinstance(body, dict):
                message = body.get('error') or message
                kind = body.get('kind')
        except ValueError:
            pass
        raise APIClientError(message, response.status_code, kind)

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        query = {key: value for key, value in (params or {}).items() if value is not None}
        try:
            response = requests.get(
                f"{self.base_url}{path}",
                params=query,
                headers=self._headers(),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Failed to fetch {path} from API: {e}")
            raise
        self._raise_for_error(response)
        return response

    def list_page(self, path: str, page: int = 1, limit: int = 10, **params: Any) -> Page:
        """
        Fetch one page from a list endpoint.

        Args:
            path: Endpoint path, e.g. '/api/events'
            page: 1-based page number
            limit: Page size
            **params: Filter and sort parameters; None values are left out

        Returns:
            Page: The items and their pagination metadata

        Raises:
            requests.RequestException: If the API request fails
            APIClientError: If the API answers with an error status
            ValueError: If the response is not a list envelope
        """
        response = self._get(path, {'page': page, 'limit': limit, **params})
        return self._parse_page(response.json())

    def _parse_page(self, body: Any) -> Page:
        """
        Parse the `{data: [...], pagination: {...}}` envelope.

        Raises:
            ValueError: If the body has any other shape
        """
        if not isinstance(body, dict) or not isinstance(body.get('data'), list):
            raise ValueError("API response must be an object with a 'data' list")
        if not isinstance(body.get('pagination'), dict):
            raise ValueError("API response must include a 'pagination' object")
        return Page(items=body['data'], info=PageInfo.from_dict(body['pagination']))

    def get_events(self, page: int = 1, limit: int = 10, **params: Any) -> Page:
        return self.list_page('/api/events', page, limit, **params)

    def get_upcoming_events(self, page: int = 1, limit: int = 5) -> Page:
        return self.list_page('/api/events/upcoming', page, limit)

    def get_past_events(self, page: int = 1, limit: int = 10) -> Page:
        return self.list_page('/api/events/past', page, limit)

    def get_categories(self, page: int = 1, limit: int = 10, **params: Any) -> Page:
        return self.list_page('/api/categories', page, limit, **params)

    def get_reviews(self, page: int = 1, limit: int = 10, **params: Any) -> Page:
        return self.list_page('/api/reviews', page, limit, **params)

    def get_users(self, page: int = 1, limit: int = 10, **params: Any) -> Page:
        return self.list_page('/api/users', page, limit, **params)

    def login(self, username: str, password: str) -> Dict[str, Any]:
        """
        Log in and keep the returned token for later requests.

        Raises:
            APIClientError: If the credentials are rejected
        """
        try:
            response = requests.post(
                f"{self.base_url}/api/auth/login",
                json={'username': username, 'password': password},
                headers={'Accept': 'application/json'},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Failed to log in against API: {e}")
            raise
        self._raise_for_error(response)
        body = response.json()
        self.token = body.get('token')
        return body
