from datetime import timedelta

from evently.auth import (
    TokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from evently.config.security import JWTConfig

import pytest

def test_password_hashing():
    hashed = hash_password('s3cret!')

    assert hashed != 's3cret!'
    assert verify_password('s3cret!', hashed)
    assert not verify_password('wrong', hashed)

def test_token_round_trip():
    token = create_access_token(7, 'alice', 'admin')
    payload = decode_access_token(token)

    assert payload.user_id == 7
    assert payload.username == 'alice'
    assert payload.is_admin

def test_expired_token_is_rejected():
    token = create_access_token(7, 'alice', 'user', expires_delta=timedelta(seconds=-5))

    with pytest.raises(TokenError):
        decode_access_token(token)

def test_token_signed_with_another_secret_is_rejected():
    token = create_access_token(7, 'alice', 'user', config=JWTConfig(secret='other-secret'))

    with pytest.raises(TokenError):
        decode_access_token(token)

def test_register_then_login(client):
    registered = client.post('/api/auth/register', json={
        'username': 'carol',
        'email': 'carol@example.com',
        'password': 'hunter22',
    })
    assert registered.status_code == 201
    assert registered.json()['role'] == 'user'

    login = client.post('/api/auth/login', json={'username': 'carol', 'password': 'hunter22'})
    assert login.status_code == 200
    body = login.json()
    assert body['username'] == 'carol'
    assert decode_access_token(body['token']).user_id == registered.json()['user_id']

def test_register_requires_all_fields(client):
    response = client.post('/api/auth/register', json={'username': 'carol', 'email': 'carol@example.com'})

    assert response.status_code == 400
    assert response.json()['error'] == 'All fields are required'

def test_register_rejects_taken_username_and_email(client, alice):
    taken_name = client.post('/api/auth/register', json={
        'username': 'alice', 'email': 'new@example.com', 'password': 'pw123456',
    })
    taken_email = client.post('/api/auth/register', json={
        'username': 'alicia', 'email': 'alice@example.com', 'password': 'pw123456',
    })

    assert taken_name.status_code == 409
    assert taken_name.json()['error'] == 'Username already taken'
    assert taken_email.status_code == 409
    assert taken_email.json()['error'] == 'Email already registered'

def test_login_with_wrong_password(client, alice):
    response = client.post('/api/auth/login', json={'username': 'alice', 'password': 'nope'})

    assert response.status_code == 401
    assert response.json() == {'error': 'Invalid credentials', 'kind': 'unauthorized'}

def test_missing_and_invalid_tokens_are_401(client):
    missing = client.get('/api/reviews')
    invalid = client.get('/api/reviews', headers={'Authorization': 'Bearer not-a-token'})

    assert missing.status_code == 401
    assert missing.json()['error'] == 'Authentication required'
    assert invalid.status_code == 401
    assert invalid.json()['error'] == 'Invalid or expired token'

def test_authenticated_non_admin_gets_403(client, alice):
    response = client.get('/api/users', headers=alice.headers)

    assert response.status_code == 403
    assert response.json()['kind'] == 'forbidden'
