"""Faction pool building and private option assignment."""

from factiondraft.draft.assignment import OPTIONS_PER_PLAYER, assign_options
from factiondraft.draft.catalog import FACTIONS, Faction, Source, get_faction
from factiondraft.draft.pool import ModeConfig, build_pool

__all__ = [
    "FACTIONS",
    "OPTIONS_PER_PLAYER",
    "Faction",
    "ModeConfig",
    "Source",
    "assign_options",
    "build_pool",
    "get_faction",
]
