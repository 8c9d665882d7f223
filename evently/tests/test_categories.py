def test_list_categories_by_id_then_by_name(client, make_category):
    sports = make_category('Sports')
    art = make_category('Art')
    music = make_category('Music')

    by_id = client.get('/api/categories').json()
    assert [c['category_id'] for c in by_id['data']] == [sports, art, music]
    assert by_id['pagination']['total'] == 3

    by_name = client.get('/api/categories', params={'sort_by': 'name'}).json()
    assert [c['name'] for c in by_name['data']] == ['Art', 'Music', 'Sports']

def test_unknown_sort_field_is_ignored(client, make_category):
    first = make_category('Zoo')
    second = make_category('Aquarium')

    response = client.get('/api/categories', params={'sort_by': 'description'})

    assert response.status_code == 200
    assert [c['category_id'] for c in response.json()['data']] == [first, second]

def test_admin_creates_category(client, admin):
    response = client.post('/api/categories', json={'name': 'Workshops', 'description': 'Hands-on'}, headers=admin.headers)

    assert response.status_code == 201
    assert response.json()['name'] == 'Workshops'
    assert client.get(f"/api/categories/{response.json()['category_id']}").json()['description'] == 'Hands-on'

def test_create_without_name_is_rejected(client, admin):
    response = client.post('/api/categories', json={'description': 'no name'}, headers=admin.headers)

    assert response.status_code == 400
    assert response.json() == {'error': 'Category name is required', 'kind': 'validation_error'}

def test_duplicate_name_conflicts_case_insensitively(client, admin, make_category):
    make_category('Music')

    response = client.post('/api/categories', json={'name': 'music'}, headers=admin.headers)

    assert response.status_code == 409
    assert response.json()['kind'] == 'conflict'

def test_create_requires_admin(client, alice):
    anonymous = client.post('/api/categories', json={'name': 'Talks'})
    regular = client.post('/api/categories', json={'name': 'Talks'}, headers=alice.headers)

    assert anonymous.status_code == 401
    assert regular.status_code == 403
    assert regular.json()['error'] == 'Forbidden - Insufficient permissions'

def test_rename_category(client, admin, make_category):
    category_id = make_category('Musc')

    response = client.put(f'/api/categories/{category_id}', json={'name': 'Music'}, headers=admin.headers)

    assert response.status_code == 200
    assert response.json()['name'] == 'Music'

def test_missing_category_is_404(client, admin):
    assert client.get('/api/categories/999').status_code == 404
    assert client.put('/api/categories/999', json={'name': 'X'}, headers=admin.headers).status_code == 404

def test_delete_category_keeps_events(client, admin, make_category, make_event):
    category_id = make_category('Music')
    event_id = make_event('Concert', category_id=category_id)

    response = client.delete(f'/api/categories/{category_id}', headers=admin.headers)

    assert response.status_code == 204
    assert client.get(f'/api/categories/{category_id}').status_code == 404
    assert client.get(f'/api/events/{event_id}').json()['category_id'] is None

def test_created_category_appears_in_listing(client, admin):
    created = client.post('/api/categories', json={'name': 'Music'}, headers=admin.headers)
    assert created.status_code == 201
    category_id = created.json()['category_id']

    listing = client.get('/api/categories', params={'limit': 100})

    assert category_id in [c['category_id'] for c in listing.json()['data']]
    assert int(listing.headers['X-Total-Count']) >= 1
