"""Database repositories."""

from factiondraft.db.repositories.rooms import RoomRepository

__all__ = ["RoomRepository"]
