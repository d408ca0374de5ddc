"""Faction catalog endpoints."""

from fastapi import APIRouter, Query
from pydantic import BaseModel

from factiondraft.draft.pool import ModeConfig, build_pool

router = APIRouter(prefix="/factions", tags=["factions"])


class FactionItem(BaseModel):
    """A faction in the list response."""

    id: str
    name: str
    source: str


class FactionListResponse(BaseModel):
    """Response for listing factions."""

    factions: list[FactionItem]


@router.get("", response_model=FactionListResponse)
async def list_factions(
    include_base: bool = Query(default=True, alias="includeBase"),
    include_pok: bool = Query(default=False, alias="includePok"),
    include_codex1: bool = Query(default=False, alias="includeCodex1"),
    include_codex2: bool = Query(default=False, alias="includeCodex2"),
) -> FactionListResponse:
    """List the factions a room with these mode flags would draft from."""
    mode = ModeConfig(
        include_base=include_base,
        include_pok=include_pok,
        include_codex1=include_codex1,
        include_codex2=include_codex2,
    )
    pool = build_pool(mode)
    return FactionListResponse(factions=[FactionItem(**f.to_dict()) for f in pool])
