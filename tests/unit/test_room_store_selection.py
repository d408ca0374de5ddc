"""Tests for choosing the room store from settings."""

from pathlib import Path

import pytest

from factiondraft.main import build_room_store
from factiondraft.rooms.store import DatabaseRoomStore, FileRoomStore, InMemoryRoomStore
from factiondraft.settings import Settings


class TestBuildRoomStore:
    """Tests for main.build_room_store."""

    def test_memory(self) -> None:
        settings = Settings(room_store="memory")

        store, engine = build_room_store(settings)

        assert not settings.uses_database
        assert isinstance(store, InMemoryRoomStore)
        assert engine is None

    def test_file(self, tmp_path: Path) -> None:
        settings = Settings(room_store="file", room_data_dir=str(tmp_path / "rooms"))

        store, engine = build_room_store(settings)

        assert isinstance(store, FileRoomStore)
        assert store.directory == tmp_path / "rooms"
        assert engine is None

    @pytest.mark.asyncio
    async def test_database(self) -> None:
        """Test that the database store comes with an engine to dispose."""
        settings = Settings(room_store="database", database_url="sqlite+aiosqlite:///:memory:")

        store, engine = build_room_store(settings)

        assert settings.uses_database
        assert isinstance(store, DatabaseRoomStore)
        assert engine is not None
        await engine.dispose()
