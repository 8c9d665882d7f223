from unittest.mock import MagicMock, patch

import pytest
import requests

from evently.db import PageInfo
from evently.web.api import APIClientError, EventlyAPIClient

def mock_response(body, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    return response

ENVELOPE = {
    'data': [{'event_id': 1, 'name': 'Concert'}],
    'pagination': {'page': 2, 'limit': 1, 'total': 3, 'pages': 3},
}

@pytest.fixture
def api_client():
    return EventlyAPIClient(base_url='http://api.test/', timeout=5, token='abc')

@patch('evently.web.api.requests.get')
def test_list_page_parses_envelope(mock_get, api_client):
    mock_get.return_value = mock_response(ENVELOPE)

    page = api_client.get_events(page=2, limit=1, sort_by='name', category_id=None)

    assert page.items == [{'event_id': 1, 'name': 'Concert'}]
    assert page.info == PageInfo(page=2, limit=1, total=3, pages=3)
    mock_get.assert_called_once_with(
        'http://api.test/api/events',
        params={'page': 2, 'limit': 1, 'sort_by': 'name'},
        headers={'Accept': 'application/json', 'Authorization': 'Bearer abc'},
        timeout=5,
    )

@patch('evently.web.api.requests.get')
def test_bare_array_is_rejected(mock_get, api_client):
    mock_get.return_value = mock_response([{'event_id': 1}])

    with pytest.raises(ValueError):
        api_client.get_events()

@patch('evently.web.api.requests.get')
def test_missing_pagination_is_rejected(mock_get, api_client):
    mock_get.return_value = mock_response({'data': []})

    with pytest.raises(ValueError):
        api_client.get_categories()

@patch('evently.web.api.requests.get')
def test_error_status_raises_with_kind(mock_get, api_client):
    mock_get.return_value = mock_response({'error': 'Authentication required', 'kind': 'unauthorized'}, 401)

    with pytest.raises(APIClientError) as excinfo:
        api_client.get_reviews(min_rating=4)

    assert excinfo.value.status_code == 401
    assert excinfo.value.kind == 'unauthorized'
    assert excinfo.value.message == 'Authentication required'

@patch('evently.web.api.requests.get')
def test_network_errors_propagate(mock_get, api_client):
    mock_get.side_effect = requests.ConnectionError("refused")

    with pytest.raises(requests.RequestException):
        api_client.get_upcoming_events()

@patch('evently.web.api.requests.post')
def test_login_keeps_token(mock_post):
    mock_post.return_value = mock_response({'token': 'jwt-token', 'username': 'alice', 'role': 'user'})
    api_client = EventlyAPIClient(base_url='http://api.test')

    body = api_client.login('alice', 'pw')

    assert body['role'] == 'user'
    assert api_client.token == 'jwt-token'
    assert mock_post.call_args.kwargs['json'] == {'username': 'alice', 'password': 'pw'}
