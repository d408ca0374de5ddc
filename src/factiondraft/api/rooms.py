"""Room API endpoints.

Clients poll ``GET /rooms/status`` to follow a room; every other endpoint
is a single mutating call. Errors raised by the room manager are turned
into JSON responses by the handler registered in ``factiondraft.main``.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from factiondraft.api.deps import get_room_manager
from factiondraft.api.rate_limit import create_room_rate_limit, join_room_rate_limit
from factiondraft.draft.pool import ModeConfig
from factiondraft.errors import ValidationError
from factiondraft.rooms.manager import RoomManager
from factiondraft.settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rooms", tags=["rooms"])


class ModeConfigRequest(BaseModel):
    """Content groups to draft from.

    Flags left out are off, so a request must opt in to the base game.
    """

    include_base: bool = Field(default=False, alias="includeBase")
    include_pok: bool = Field(default=False, alias="includePok")
    include_codex1: bool = Field(default=False, alias="includeCodex1")
    include_codex2: bool = Field(default=False, alias="includeCodex2")

    model_config = {"populate_by_name": True}

    def to_mode(self) -> ModeConfig:
        """Convert to the domain mode config."""
        return ModeConfig(
            include_base=self.include_base,
            include_pok=self.include_pok,
            include_codex1=self.include_codex1,
            include_codex2=self.include_codex2,
        )


class CreateRoomRequest(BaseModel):
    """Request body for creating a room."""

    host_name: str = Field(default="", alias="hostName", max_length=50)
    mode: ModeConfigRequest = Field(default_factory=ModeConfigRequest)

    model_config = {"populate_by_name": True}


class JoinRoomRequest(BaseModel):
    """Request body for joining a room."""

    code: str = ""
    name: str = Field(default="", max_length=50)


class RoomMembershipResponse(BaseModel):
    """Response for creating or joining a room."""

    room_code: str = Field(alias="roomCode")
    player_id: str = Field(alias="playerId")
    host_id: str = Field(alias="hostId")

    model_config = {"populate_by_name": True}


class StartDraftRequest(BaseModel):
    """Request body for starting the draft."""

    code: str = ""
    host_id: str = Field(default="", alias="hostId")

    model_config = {"populate_by_name": True}


class StartDraftResponse(BaseModel):
    """Response for starting the draft."""

    status: str


class SubmitPickRequest(BaseModel):
    """Request body for submitting a pick."""

    code: str = ""
    player_id: str = Field(default="", alias="playerId")
    faction_id: str = Field(default="", alias="factionId")

    model_config = {"populate_by_name": True}


class SubmitPickResponse(BaseModel):
    """Response for submitting a pick."""

    status: str
    submitted_count: int = Field(alias="submittedCount")
    total_count: int = Field(alias="totalCount")

    model_config = {"populate_by_name": True}


@router.post(
    "/create",
    response_model=RoomMembershipResponse,
    dependencies=[Depends(create_room_rate_limit)],
)
async def create_room(
    request: CreateRoomRequest,
    manager: RoomManager = Depends(get_room_manager),
) -> RoomMembershipResponse:
    """Create a new room. The caller becomes the host."""
    room, player = await manager.create_room(request.host_name, request.mode.to_mode())

    return RoomMembershipResponse(
        room_code=room.code,
        player_id=player.id,
        host_id=room.host_id,
    )


@router.post(
    "/join",
    response_model=RoomMembershipResponse,
    dependencies=[Depends(join_room_rate_limit)],
)
async def join_room(
    request: JoinRoomRequest,
    manager: RoomManager = Depends(get_room_manager),
) -> RoomMembershipResponse:
    """Join a room that has not started drafting yet."""
    room, player = await manager.join_room(request.code, request.name)

    return RoomMembershipResponse(
        room_code=room.code,
        player_id=player.id,
        host_id=room.host_id,
    )


@router.post("/start", response_model=StartDraftResponse)
async def start_draft(
    request: StartDraftRequest,
    manager: RoomManager = Depends(get_room_manager),
) -> StartDraftResponse:
    """Deal private options to every player (host only)."""
    room = await manager.start_draft(request.code, request.host_id)
    return StartDraftResponse(status=room.status.value)


@router.post("/select", response_model=SubmitPickResponse)
async def submit_pick(
    request: SubmitPickRequest,
    manager: RoomManager = Depends(get_room_manager),
) -> SubmitPickResponse:
    """Submit the caller's hidden pick."""
    room = await manager.submit_pick(request.code, request.player_id, request.faction_id)
    return SubmitPickResponse(
        status=room.status.value,
        submitted_count=room.submitted_count,
        total_count=room.total_count,
    )


@router.get("/status")
async def get_status(
    code: str = "",
    player_id: str = Query(default="", alias="playerId"),
    manager: RoomManager = Depends(get_room_manager),
) -> dict[str, Any]:
    """Get the caller's view of a room.

    Only the caller's own options and pick are included.
    """
    if not code.strip() or not player_id:
        raise ValidationError("code and playerId are required.")

    return await manager.get_status(code, player_id)


@router.get("/{code}/picks")
async def list_picks(
    code: str,
    manager: RoomManager = Depends(get_room_manager),
) -> dict[str, Any]:
    """List every pick in a room. Only available in dev mode."""
    if not get_settings().dev_mode:
        raise HTTPException(status_code=404, detail="Not Found")

    picks = await manager.list_picks(code)
    return {"picks": {player_id: faction.to_dict() for player_id, faction in picks.items()}}
