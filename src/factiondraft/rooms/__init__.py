"""Draft rooms.

A room is where players gather before a draft and where their hidden picks
are collected. Rooms are identified by a short code shared out of band.
"""

from factiondraft.rooms.manager import RoomManager, normalize_code
from factiondraft.rooms.models import Player, Room, RoomStatus
from factiondraft.rooms.store import (
    DatabaseRoomStore,
    FileRoomStore,
    InMemoryRoomStore,
    RoomStore,
)

__all__ = [
    "DatabaseRoomStore",
    "FileRoomStore",
    "InMemoryRoomStore",
    "Player",
    "Room",
    "RoomManager",
    "RoomStatus",
    "RoomStore",
    "normalize_code",
]
