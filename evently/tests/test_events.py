from datetime import timedelta

import pytest

from evently.utils.timezone import now_utc

def _event_payload(category_id, **overrides):
    payload = {
        'name': 'Hackathon',
        'category_id': category_id,
        'event_date': (now_utc() + timedelta(days=3)).isoformat(),
        'location': 'Lab 1',
    }
    payload.update(overrides)
    return payload

def test_admin_creates_event(client, admin, make_category):
    category_id = make_category('Tech')

    response = client.post('/api/events', json=_event_payload(category_id), headers=admin.headers)

    assert response.status_code == 201
    event = response.json()
    assert event['user_id'] == admin.user_id
    assert event['attendee_count'] == 0
    assert client.get(f"/api/events/{event['event_id']}").json()['name'] == 'Hackathon'

def test_create_event_requires_admin(client, alice, make_category):
    category_id = make_category('Tech')

    assert client.post('/api/events', json=_event_payload(category_id)).status_code == 401
    assert client.post('/api/events', json=_event_payload(category_id), headers=alice.headers).status_code == 403

def test_create_event_requires_name_category_and_date(client, admin):
    response = client.post('/api/events', json={'name': 'Hackathon'}, headers=admin.headers)

    assert response.status_code == 400
    assert response.json()['error'] == 'Name, category_id, and event_date are required'

def test_malformed_body_is_a_validation_error(client, admin, make_category):
    category_id = make_category('Tech')

    response = client.post(
        '/api/events',
        json=_event_payload(category_id, attendee_count=-3),
        headers=admin.headers,
    )

    assert response.status_code == 400
    assert response.json()['kind'] == 'validation_error'

def test_missing_event_is_404(client):
    response = client.get('/api/events/12345')

    assert response.status_code == 404
    assert response.json() == {'error': 'Event not found', 'kind': 'not_found'}

def test_owner_updates_event(client, alice, bob, make_event):
    event_id = make_event('Book club', user_id=alice.user_id)

    updated = client.put(f'/api/events/{event_id}', json={'location': 'Library'}, headers=alice.headers)
    forbidden = client.put(f'/api/events/{event_id}', json={'location': 'Cellar'}, headers=bob.headers)
    empty = client.put(f'/api/events/{event_id}', json={}, headers=alice.headers)

    assert updated.status_code == 200
    assert updated.json()['location'] == 'Library'
    assert updated.json()['name'] == 'Book club'
    assert forbidden.status_code == 403
    assert empty.status_code == 400

def test_admin_updates_any_event(client, admin, alice, make_event):
    event_id = make_event('Book club', user_id=alice.user_id)

    response = client.put(f'/api/events/{event_id}', json={'name': 'Reading circle'}, headers=admin.headers)

    assert response.status_code == 200
    assert response.json()['name'] == 'Reading circle'

def test_delete_event_removes_its_reviews(client, admin, alice, make_event, make_review):
    event_id = make_event('Concert')
    make_review(event_id, alice.user_id, 5)

    response = client.delete(f'/api/events/{event_id}', headers=admin.headers)

    assert response.status_code == 204
    assert client.get(f'/api/events/{event_id}').status_code == 404
    assert client.get('/api/reviews', headers=admin.headers).json()['pagination']['total'] == 0

def test_non_owner_cannot_delete(client, bob, make_event):
    event_id = make_event('Concert')

    assert client.delete(f'/api/events/{event_id}', headers=bob.headers).status_code == 403

def test_upcoming_events_soonest_first(client, make_event):
    now = now_utc()
    later = make_event('Later', event_date=now + timedelta(days=10))
    sooner = make_event('Sooner', event_date=now + timedelta(days=1))
    make_event('Gone', event_date=now - timedelta(days=3))

    response = client.get('/api/events/upcoming')

    assert [e['event_id'] for e in response.json()['data']] == [sooner, later]
    assert response.json()['pagination']['limit'] == 5

def test_past_events_with_ratings(client, alice, bob, make_event, make_review):
    now = now_utc()
    older = make_event('Older', event_date=now - timedelta(days=30))
    recent = make_event('Recent', event_date=now - timedelta(days=2))
    make_event('Coming', event_date=now + timedelta(days=2))
    make_review(recent, alice.user_id, 5)
    make_review(recent, bob.user_id, 2)

    body = client.get('/api/events/past').json()

    assert [e['event_id'] for e in body['data']] == [recent, older]
    assert body['data'][0]['review_count'] == 2
    assert body['data'][0]['avg_rating'] == 3.5
    assert body['data'][1]['review_count'] == 0
    assert body['data'][1]['avg_rating'] is None
    assert body['pagination'] == {'page': 1, 'limit': 10, 'total': 2, 'pages': 1}

def test_dashboard_stats(client, alice, make_event):
    now = now_utc()
    make_event('Next week', event_date=now + timedelta(days=7))
    make_event('Last week', event_date=now - timedelta(days=7))

    assert client.get('/api/dashboard/stats').status_code == 401
    stats = client.get('/api/dashboard/stats', headers=alice.headers).json()
    assert stats == {'total_events': 2, 'upcoming_events': 1, 'completed_events': 1}

def test_health_check(client):
    response = client.get('/')

    assert response.status_code == 200
    assert response.json()['status'] == 'healthy'
    assert response.json()['database'] == 'ok'

@pytest.mark.parametrize("field", ['attendee_count', 'event_date'])
def test_update_cannot_clear_required_columns(client, admin, make_event, field):
    event_id = make_event('Concert')

    response = client.put(f'/api/events/{event_id}', json={field: None}, headers=admin.headers)

    assert response.status_code == 400
    assert response.json() == {'error': f'{field} cannot be empty', 'kind': 'validation_error'}
    assert client.get(f'/api/events/{event_id}').status_code == 200

def test_nullable_columns_can_be_cleared(client, admin, make_event, make_category):
    event_id = make_event('Concert', category_id=make_category('Music'))

    response = client.put(f'/api/events/{event_id}', json={'category_id': None, 'location': None}, headers=admin.headers)

    assert response.status_code == 200
    assert response.json()['category_id'] is None

def test_unknown_category_is_404(client, admin, make_event):
    created = client.post('/api/events', json=_event_payload(4242), headers=admin.headers)
    event_id = make_event('Concert')
    updated = client.put(f'/api/events/{event_id}', json={'category_id': 4242}, headers=admin.headers)

    assert created.status_code == 404
    assert created.json()['error'] == 'Category not found'
    assert updated.status_code == 404

def test_out_of_range_ids_in_body_are_rejected(client, admin, make_event):
    event_id = make_event('Concert')

    created = client.post('/api/events', json=_event_payload(10**20), headers=admin.headers)
    updated = client.put(f'/api/events/{event_id}', json={'attendee_count': 10**20}, headers=admin.headers)

    assert created.status_code == 400
    assert updated.status_code == 400
