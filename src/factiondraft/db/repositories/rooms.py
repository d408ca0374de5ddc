"""Room repository for database operations."""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from factiondraft.db.models import RoomRecord
from factiondraft.errors import StaleRoomError
from factiondraft.rooms.models import Room

logger = logging.getLogger(__name__)


class RoomRepository:
    """Repository for managing rooms in the database."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: The database session to use
        """
        self.session = session

    async def save(self, room: Room, expected_version: int | None = None) -> None:
        """Insert or update a room.

        Args:
            room: The room domain object to save
            expected_version: If given, only write when the stored version
                matches (0 means the room must not exist yet)

        Raises:
            StaleRoomError: If the stored version does not match
        """
        if expected_version == 0:
            await self._insert(room)
            return

        if expected_version is None:
            existing = await self._get_record(room.code)
            if existing is None:
                await self._insert(room)
                return
            self._apply(existing, room)
            await self.session.flush()
            logger.debug(f"Updated room {room.code} in database")
            return

        result = await self.session.execute(
            update(RoomRecord)
            .where(RoomRecord.code == room.code)
            .where(RoomRecord.version == expected_version)
            .values(
                host_id=room.host_id,
                status=room.status.value,
                version=room.version,
                data=room.to_dict(),
            )
        )
        if result.rowcount == 0:
            current = await self._get_record(room.code)
            actual = current.version if current is not None else 0
            raise StaleRoomError(room.code, expected_version, actual)

        logger.debug(f"Updated room {room.code} to version {room.version} in database")

    async def get_by_code(self, code: str) -> Room | None:
        """Get a room by code.

        Args:
            code: The room code

        Returns:
            Room domain object or None if not found
        """
        record = await self._get_record(code)
        if record is None:
            return None
        return Room.from_dict(record.data)

    async def exists(self, code: str) -> bool:
        """Check if a room exists.

        Args:
            code: The room code

        Returns:
            True if room exists
        """
        result = await self.session.execute(
            select(RoomRecord.code).where(RoomRecord.code == code)
        )
        return result.scalar_one_or_none() is not None

    async def _get_record(self, code: str) -> RoomRecord | None:
        result = await self.session.execute(select(RoomRecord).where(RoomRecord.code == code))
        return result.scalar_one_or_none()

    async def _insert(self, room: Room) -> None:
        record = RoomRecord(
            code=room.code,
            host_id=room.host_id,
            status=room.status.value,
            version=room.version,
            data=room.to_dict(),
            created_at=room.created_at,
        )
        self.session.add(record)
        try:
            await self.session.flush()
        except IntegrityError as e:
            # Another writer created a room with this code first
            raise StaleRoomError(room.code, 0, None) from e

        logger.info(f"Saved room {room.code} to database")

    def _apply(self, record: RoomRecord, room: Room) -> None:
        record.host_id = room.host_id
        record.status = room.status.value
        record.version = room.version
        record.data = room.to_dict()
