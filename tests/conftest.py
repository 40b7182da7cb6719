"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest

from eventhub.auth.model import Identity
from fakes import InMemoryStore

NOW = datetime(2023, 7, 1, tzinfo=timezone.utc)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def alice() -> Identity:
    return Identity(id="alice", email="alice@example.com")


@pytest.fixture
def bob() -> Identity:
    return Identity(id="bob", email="bob@example.com")


@pytest.fixture
def carol() -> Identity:
    return Identity(id="carol", email="carol@example.com")


@pytest.fixture
def seeded(store):
    """Two organizers, one past and one upcoming event."""
    store.seed(
        "profiles",
        {"id": "alice", "full_name": "Alice Smith", "avatar_url": "https://img/alice.png", "email": "alice@example.com"},
        {"id": "bob", "full_name": None, "avatar_url": None, "email": "bob@example.com"},
    )
    workshop, mixer = store.seed(
        "events",
        {
            "title": "Web Development Workshop",
            "description": "Learn the basics of HTML, CSS and JavaScript.",
            "date": "2023-06-01T10:00:00+00:00",
            "end_time": "2023-06-01T16:00:00+00:00",
            "location": "Online",
            "organizer_id": "alice",
        },
        {
            "title": "Startup Networking Mixer",
            "description": "Connect with founders and investors.",
            "date": "2023-08-01T18:00:00+00:00",
            "end_time": "2023-08-01T21:00:00+00:00",
            "location": "Innovation Hub, San Francisco",
            "organizer_id": "bob",
        },
    )
    return {"workshop": workshop, "mixer": mixer}
