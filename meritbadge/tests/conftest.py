"""Shared fixtures: an in-memory SQLite database and an event factory."""

import os

# Must be set before meritbadge modules create the global database
os.environ.setdefault('ENVIRONMENT', 'development')
os.environ['DATABASE_URL'] = 'sqlite://'

from datetime import date, datetime, timedelta, timezone
from itertools import count

import pytest
from fastapi.testclient import TestClient

from meritbadge.api.app import app
from meritbadge.api.dependencies import get_event_service
from meritbadge.db import EventStore, db
from meritbadge.events.service import EventService
from meritbadge.models.event import EventStatus

TODAY = date(2025, 1, 15)

@pytest.fixture
def database():
    db.drop_all()
    db.init_db()
    yield db
    db.drop_all()

@pytest.fixture
def store(database):
    return EventStore(database)

@pytest.fixture
def make_event(store):
    """Create events with sensible defaults; created_at follows insertion order."""
    sequence = count()
    base_time = datetime(2024, 12, 1, tzinfo=timezone.utc)

    def _make_event(**overrides):
        n = next(sequence)
        fields = {
            'badge_name': 'Camping',
            'created_by': 'user-test',
            'title': f'Class {n}',
            'event_date': TODAY + timedelta(days=1),
            'status': EventStatus.APPROVED.value,
            'created_at': base_time + timedelta(minutes=n),
        }
        fields.update(overrides)
        return store.create(**fields)

    return _make_event

@pytest.fixture
def service(store):
    return EventService(store=store, today=lambda: TODAY)

@pytest.fixture
def client(service):
    app.dependency_overrides[get_event_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
