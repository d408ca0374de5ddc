"""Main API router."""

from fastapi import APIRouter

from factiondraft.api.factions import router as factions_router
from factiondraft.api.rooms import router as rooms_router

api_router = APIRouter()
api_router.include_router(factions_router)
api_router.include_router(rooms_router)
