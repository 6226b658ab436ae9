"""
Shared fixtures.

`store` is a fresh seeded schedule per test (F1-F5). `client` runs the app
lifespan, so every test gets its own seeded store on `app.state`.
"""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from flightdesk.main import app
from flightdesk.schedule import ScheduleStore


@pytest.fixture
def store():
    return ScheduleStore.seeded()


@pytest.fixture
def weather():
    """Weather client double; tests set `weather.resolve.return_value`."""
    return MagicMock()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
