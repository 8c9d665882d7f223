"""Shared fixtures: an application on a private in-memory database, users and seed data."""

import os

os.environ.setdefault('ENVIRONMENT', 'development')
os.environ['JWT_SECRET'] = 'test-secret'

from datetime import datetime, timedelta
from types import SimpleNamespace
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from evently.api.app import create_application
from evently.auth import create_access_token, hash_password
from evently.db import DatabaseConfig
from evently.models import Event, EventCategory, Review, User
from evently.utils.timezone import now_utc

TEST_PASSWORD = 'password123'

@pytest.fixture
def app():
    return create_application(DatabaseConfig(url="sqlite://"))

@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client

@pytest.fixture
def database(client):
    return client.app.state.db

@pytest.fixture
def make_user(database):
    """Create a user directly in the database and return it with ready-made auth headers."""
    def factory(username: str, role: str = 'user'):
        with database.session() as session:
            user = User(
                username=username,
                email=f"{username}@example.com",
                password_hash=hash_password(TEST_PASSWORD),
                role=role,
            )
            session.add(user)
            session.flush()
            user_id = user.user_id
        token = create_access_token(user_id, username, role)
        return SimpleNamespace(
            user_id=user_id,
            username=username,
            role=role,
            token=token,
            headers={'Authorization': f'Bearer {token}'},
        )
    return factory

@pytest.fixture
def admin(make_user):
    return make_user('admin', role='admin')

@pytest.fixture
def alice(make_user):
    return make_user('alice')

@pytest.fixture
def bob(make_user):
    return make_user('bob')

@pytest.fixture
def make_category(database):
    def factory(name: str, description: Optional[str] = None) -> int:
        with database.session() as session:
            category = EventCategory(name=name, description=description)
            session.add(category)
            session.flush()
            return category.category_id
    return factory

@pytest.fixture
def make_event(database, admin):
    """Insert an event. Dates default to one week from now."""
    def factory(
        name: str,
        event_date: Optional[datetime] = None,
        category_id: Optional[int] = None,
        user_id: Optional[int] = None,
        created_at: Optional[datetime] = None
    ) -> int:
        fields = dict(
            user_id=user_id or admin.user_id,
            name=name,
            event_date=event_date or now_utc() + timedelta(days=7),
            category_id=category_id,
        )
        if created_at is not None:
            fields['created_at'] = created_at
        with database.session() as session:
            event = Event(**fields)
            session.add(event)
            session.flush()
            return event.event_id
    return factory

@pytest.fixture
def make_review(database):
    def factory(event_id: int, user_id: int, rating: int, status: str = 'pending', text: str = '') -> int:
        with database.session() as session:
            review = Review(
                event_id=event_id,
                user_id=user_id,
                rating=rating,
                review_text=text,
                moderation_status=status,
            )
            session.add(review)
            session.flush()
            return review.review_id
    return factory
