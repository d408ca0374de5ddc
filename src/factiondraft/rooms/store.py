"""Room stores.

A room store is a keyed collection of rooms supporting get, put and an
existence check. The room manager is written against ``RoomStore`` and
does not care which backend it gets:

- ``InMemoryRoomStore`` for tests and single-process deployments
- ``FileRoomStore`` for one JSON file per room on local disk
- ``DatabaseRoomStore`` for a shared SQL database

Every backend copies rooms on the way in and out, so callers never hold a
reference to stored state. ``put`` supports compare-and-swap on
``Room.version``.
"""

import asyncio
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from factiondraft.errors import StaleRoomError
from factiondraft.rooms.models import Room

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


class RoomStore(ABC):
    """Keyed collection of rooms."""

    @abstractmethod
    async def get(self, code: str) -> Room | None:
        """Get a copy of the room with this code, or None."""

    @abstractmethod
    async def put(self, room: Room, expected_version: int | None = None) -> None:
        """Insert or replace a room.

        Args:
            room: The room to store
            expected_version: If given, the write only succeeds when the stored
                version equals this value. A missing room has version 0.

        Raises:
            StaleRoomError: If the stored version does not match
        """

    @abstractmethod
    async def exists(self, code: str) -> bool:
        """Check if a room with this code is stored."""


class InMemoryRoomStore(RoomStore):
    """Rooms kept in a dict owned by this instance."""

    def __init__(self) -> None:
        self._rooms: dict[str, Room] = {}

    async def get(self, code: str) -> Room | None:
        room = self._rooms.get(code)
        return room.copy() if room is not None else None

    async def put(self, room: Room, expected_version: int | None = None) -> None:
        if expected_version is not None:
            current = self._rooms.get(room.code)
            actual = current.version if current is not None else 0
            if actual != expected_version:
                raise StaleRoomError(room.code, expected_version, actual)
        self._rooms[room.code] = room.copy()

    async def exists(self, code: str) -> bool:
        return code in self._rooms

    def clear(self) -> None:
        """Remove all rooms. Used for testing."""
        self._rooms.clear()

    def __len__(self) -> int:
        return len(self._rooms)


class FileRoomStore(RoomStore):
    """One ``<CODE>.json`` file per room in a directory.

    Writes go to a temporary file in the same directory which is then
    renamed over the target, so readers never see a half-written room.
    Compare-and-swap is checked under an in-process lock; it does not guard
    against other processes writing the same directory.

    Codes must be short ASCII letters and digits. Anything else reads as
    missing and cannot be written.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self._write_lock = asyncio.Lock()

    def _path(self, code: str) -> Path:
        if not (code.isascii() and code.isalnum() and len(code) <= 64):
            raise ValueError(f"Unusable room code for a file name: {code!r}")
        return self.directory / f"{code}.json"

    def _read(self, code: str) -> Room | None:
        try:
            path = self._path(code)
        except ValueError:
            return None
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        return Room.from_dict(data)

    def _write(self, room: Room) -> None:
        target = self._path(room.code)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.directory, prefix=f".{room.code}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(room.to_dict(), f)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    async def get(self, code: str) -> Room | None:
        return await asyncio.to_thread(self._read, code)

    async def put(self, room: Room, expected_version: int | None = None) -> None:
        async with self._write_lock:
            if expected_version is not None:
                current = await asyncio.to_thread(self._read, room.code)
                actual = current.version if current is not None else 0
                if actual != expected_version:
                    raise StaleRoomError(room.code, expected_version, actual)
            await asyncio.to_thread(self._write, room)
        logger.debug(f"Wrote room {room.code} to {self.directory}")

    async def exists(self, code: str) -> bool:
        try:
            path = self._path(code)
        except ValueError:
            return False
        return await asyncio.to_thread(path.exists)


class DatabaseRoomStore(RoomStore):
    """Rooms stored in SQL via ``RoomRepository``.

    Each call opens its own session and commits before returning.
    """

    def __init__(self, session_factory: "async_sessionmaker[AsyncSession]") -> None:
        self._session_factory = session_factory

    async def get(self, code: str) -> Room | None:
        from factiondraft.db.repositories.rooms import RoomRepository

        async with self._session_factory() as session:
            return await RoomRepository(session).get_by_code(code)

    async def put(self, room: Room, expected_version: int | None = None) -> None:
        from factiondraft.db.repositories.rooms import RoomRepository

        async with self._session_factory() as session:
            try:
                await RoomRepository(session).save(room, expected_version=expected_version)
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def exists(self, code: str) -> bool:
        from factiondraft.db.repositories.rooms import RoomRepository

        async with self._session_factory() as session:
            return await RoomRepository(session).exists(code)
