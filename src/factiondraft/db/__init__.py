"""Database layer."""

from factiondraft.db.models import Base, RoomRecord
from factiondraft.db.repositories import RoomRepository
from factiondraft.db.session import create_engine, create_session_factory, create_tables

__all__ = [
    "Base",
    "RoomRecord",
    "RoomRepository",
    "create_engine",
    "create_session_factory",
    "create_tables",
]
