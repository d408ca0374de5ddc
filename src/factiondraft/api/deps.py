"""FastAPI dependencies."""

from fastapi import Request

from factiondraft.rooms.manager import RoomManager


def get_room_manager(request: Request) -> RoomManager:
    """Get the room manager created at application start-up."""
    return request.app.state.room_manager
