"""Shared fixtures: in-memory Mongo store and an HTTP client over the app.

Every test gets a fresh mongomock-motor client. The app lifespan is not run
by the ASGI transport, so the store handle is attached to ``app.state``
directly, the same way start-up does it.
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

# Ensure tests never reach a real database
os.environ.setdefault("DB_URI", "mongodb://localhost:27017/exercise_tracker_test")

from api.main import app  # noqa: E402
from models.database import Database  # noqa: E402
from services.exercise_store import ExerciseStore  # noqa: E402


@pytest.fixture
def database():
    return Database(AsyncMongoMockClient(), "exercise_tracker_test")


@pytest.fixture
def store(database):
    return ExerciseStore(database)


@pytest.fixture
async def client(store):
    app.state.store = store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def user(client):
    """A user created through the API."""
    res = await client.post("/api/users", data={"username": "fcc_test"})
    assert res.status_code == 200
    return res.json()
