"""Tests for the in-memory and file room stores."""

from pathlib import Path

import pytest

from factiondraft.draft.catalog import get_faction
from factiondraft.draft.pool import ModeConfig
from factiondraft.errors import StaleRoomError
from factiondraft.rooms.models import Player, Room, RoomStatus
from factiondraft.rooms.store import FileRoomStore, InMemoryRoomStore, RoomStore


def make_room(code: str = "ABCDEF", version: int = 1) -> Room:
    host = Player(id="host", name="Host")
    return Room(code=code, host_id="host", mode=ModeConfig(), players=[host], version=version)


@pytest.fixture(params=["memory", "file"])
def room_store(request: pytest.FixtureRequest, tmp_path: Path) -> RoomStore:
    """Each test runs against both local stores."""
    if request.param == "memory":
        return InMemoryRoomStore()
    return FileRoomStore(tmp_path / "rooms")


class TestRoomStore:
    """Behaviour shared by every room store."""

    @pytest.mark.asyncio
    async def test_get_missing(self, room_store: RoomStore) -> None:
        assert await room_store.get("NOPE22") is None
        assert await room_store.exists("NOPE22") is False

    @pytest.mark.asyncio
    async def test_put_and_get(self, room_store: RoomStore) -> None:
        """Test that a stored room reads back equal."""
        room = make_room()
        await room_store.put(room)

        assert await room_store.exists(room.code) is True
        assert await room_store.get(room.code) == room

    @pytest.mark.asyncio
    async def test_get_returns_copy(self, room_store: RoomStore) -> None:
        """Test that mutating a loaded room does not change the store."""
        room = make_room()
        await room_store.put(room)

        loaded = await room_store.get(room.code)
        loaded.players.append(Player(id="x", name="X"))
        room.players.append(Player(id="y", name="Y"))

        assert (await room_store.get(room.code)).total_count == 1

    @pytest.mark.asyncio
    async def test_put_replaces(self, room_store: RoomStore) -> None:
        """Test upserting a drafting room with options and picks."""
        room = make_room()
        await room_store.put(room)

        room.status = RoomStatus.DRAFTING
        room.options_by_player = {"host": [get_faction("sol"), get_faction("yin")]}
        room.picks_by_player = {"host": get_faction("yin")}
        room.version = 2
        await room_store.put(room)

        loaded = await room_store.get(room.code)
        assert loaded.status == RoomStatus.DRAFTING
        assert loaded.picks_by_player["host"] == get_faction("yin")
        assert loaded.version == 2

    @pytest.mark.asyncio
    async def test_compare_and_swap(self, room_store: RoomStore) -> None:
        """Test that a write against an old version is rejected."""
        room = make_room(version=1)
        await room_store.put(room, expected_version=0)

        room.version = 2
        await room_store.put(room, expected_version=1)

        stale = make_room(version=2)
        stale.players.append(Player(id="late", name="Late"))
        with pytest.raises(StaleRoomError):
            await room_store.put(stale, expected_version=1)

        assert (await room_store.get(room.code)).total_count == 1

    @pytest.mark.asyncio
    async def test_insert_only_when_missing(self, room_store: RoomStore) -> None:
        """Test that expected_version=0 refuses to overwrite an existing room."""
        await room_store.put(make_room(), expected_version=0)

        with pytest.raises(StaleRoomError):
            await room_store.put(make_room(), expected_version=0)


class TestFileRoomStore:
    """Tests specific to the file store."""

    @pytest.mark.asyncio
    async def test_one_file_per_room(self, tmp_path: Path) -> None:
        store = FileRoomStore(tmp_path)
        await store.put(make_room("AAAAAA"))
        await store.put(make_room("BBBBBB"))

        assert sorted(p.name for p in tmp_path.iterdir()) == ["AAAAAA.json", "BBBBBB.json"]

    @pytest.mark.asyncio
    async def test_survives_new_instance(self, tmp_path: Path) -> None:
        """Test that rooms persist across store instances."""
        room = make_room()
        await FileRoomStore(tmp_path).put(room)

        assert await FileRoomStore(tmp_path).get(room.code) == room

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", ["../OUTSIDE", "AB\x00CD", "A" * 300, "AB/CD"])
    async def test_unusable_codes(self, tmp_path: Path, code: str) -> None:
        """Test that codes which are not plain file names read as missing."""
        rooms_dir = tmp_path / "rooms"
        store = FileRoomStore(rooms_dir)
        (tmp_path / "OUTSIDE.json").write_text("{}")

        assert await store.get(code) is None
        assert await store.exists(code) is False
        with pytest.raises(ValueError):
            await store.put(make_room(code))
        assert list(rooms_dir.iterdir()) == []


class TestInMemoryRoomStore:
    """Tests specific to the in-memory store."""

    @pytest.mark.asyncio
    async def test_instances_do_not_share_rooms(self) -> None:
        first = InMemoryRoomStore()
        second = InMemoryRoomStore()
        await first.put(make_room())

        assert await second.exists("ABCDEF") is False

    @pytest.mark.asyncio
    async def test_clear(self) -> None:
        store = InMemoryRoomStore()
        await store.put(make_room())
        store.clear()
        assert len(store) == 0
