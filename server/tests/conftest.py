"""Pytest configuration and fixtures for testing."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from db import connection
from services import revalidation
from fake_mongo import FakeDatabase

SERVICE_MODULES = [
    "services.user_profile",
    "services.user_search",
    "services.user_threads",
    "services.activity",
]


@pytest.fixture(autouse=True)
def reset_state():
    """Each test starts disconnected and without revalidation callbacks."""
    connection.close_client()
    revalidation.clear_revalidators()
    yield
    connection.close_client()
    revalidation.clear_revalidators()


@pytest.fixture
def fake_db(monkeypatch):
    """In-memory database handed to every action instead of a real connection."""
    db = FakeDatabase()
    for module in SERVICE_MODULES:
        monkeypatch.setattr(f"{module}.ensure_connected", AsyncMock(return_value=db))
    return db


@pytest.fixture
def make_user(fake_db):
    """Seed a user; created_at increases with every call."""
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _make(user_id, username=None, name=None, **extra):
        counter["n"] += 1
        doc = {
            "id": user_id,
            "username": (username or user_id).lower(),
            "name": name or f"User {user_id}",
            "bio": "",
            "image": f"https://img.example/{user_id}.png",
            "onboarded": True,
            "threads": [],
            "communities": [],
            "created_at": base + timedelta(minutes=counter["n"]),
        }
        doc.update(extra)
        fake_db.users.seed(doc)
        return doc

    return _make


@pytest.fixture
def make_thread(fake_db):
    """Seed a thread, linking it to its author and, for replies, to its parent."""
    base = datetime(2024, 2, 1, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _make(author, text="hello", parent=None, community=None):
        counter["n"] += 1
        doc = {
            "text": text,
            "author": author,
            "community": community,
            "parent_id": parent,
            "children": [],
            "created_at": base + timedelta(minutes=counter["n"]),
        }
        (thread_id,) = fake_db.threads.seed(doc)
        if parent is not None:
            parent_doc = next(d for d in fake_db.threads.docs if d["_id"] == parent)
            parent_doc["children"].append(thread_id)
        else:
            user = next((d for d in fake_db.users.docs if d["id"] == author), None)
            if user is not None:
                user["threads"].append(thread_id)
        return thread_id

    return _make


@pytest.fixture
def test_client():
    """FastAPI test client. Lifespan does not run, so nothing connects."""
    # Import here to avoid circular imports
    from main import app

    return TestClient(app)
