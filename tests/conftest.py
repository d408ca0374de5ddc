"""Pytest configuration and fixtures."""

import os

# Disable rate limiting and keep rooms in memory for all tests
os.environ["RATE_LIMITING_ENABLED"] = "false"
os.environ["ROOM_STORE"] = "memory"
os.environ["DEV_MODE"] = "false"

# Clear the settings cache to pick up the new environment variables
from factiondraft.settings import get_settings

get_settings.cache_clear()

import random  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from factiondraft.main import app  # noqa: E402
from factiondraft.rooms.manager import RoomManager  # noqa: E402
from factiondraft.rooms.store import InMemoryRoomStore  # noqa: E402


@pytest.fixture
def store() -> InMemoryRoomStore:
    """Create an empty in-memory room store."""
    return InMemoryRoomStore()


@pytest.fixture
def manager(store: InMemoryRoomStore) -> RoomManager:
    """Create a room manager with a seeded random source."""
    return RoomManager(store, rng=random.Random(1234))


@pytest.fixture(autouse=True)
def fresh_app_manager() -> RoomManager:
    """Give the app a fresh room manager for each test."""
    room_manager = RoomManager(InMemoryRoomStore(), rng=random.Random(42))
    app.state.room_manager = room_manager
    return room_manager


@pytest.fixture
async def client() -> AsyncClient:
    """Create an async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
