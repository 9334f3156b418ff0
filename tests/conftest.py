"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from config import Settings
from tests.factories import FakeClock


@pytest.fixture
def settings():
    """Test settings with localhost defaults and the in-memory tick store."""
    return Settings(
        kafka_bootstrap_servers="localhost:9092",
        redis_url="redis://localhost:6379/1",
        tick_store="memory",
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client(settings, clock):
    from api.main import create_app

    with TestClient(create_app(settings, clock=clock)) as test_client:
        yield test_client
