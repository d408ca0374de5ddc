"""Faction pool builder.

Filters the static catalog down to the factions enabled by a room's mode
configuration. The base game is mandatory; expansions are opt-in.
"""

from dataclasses import dataclass
from typing import Any

from factiondraft.draft.catalog import FACTIONS, Faction, Source
from factiondraft.errors import ConfigurationError


@dataclass(frozen=True)
class ModeConfig:
    """Which content groups a room drafts from.

    Attributes:
        include_base: Base game factions (must be True)
        include_pok: Prophecy of Kings factions
        include_codex1: Codex I factions
        include_codex2: Codex II factions
    """

    include_base: bool = True
    include_pok: bool = False
    include_codex1: bool = False
    include_codex2: bool = False

    def validate(self) -> None:
        """Raise ConfigurationError unless the base game is enabled."""
        if not self.include_base:
            raise ConfigurationError("Base game must be included.")

    def enabled_sources(self) -> set[Source]:
        """Get the set of enabled content groups."""
        sources = {Source.BASE} if self.include_base else set()
        if self.include_pok:
            sources.add(Source.POK)
        if self.include_codex1:
            sources.add(Source.CODEX1)
        if self.include_codex2:
            sources.add(Source.CODEX2)
        return sources

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "includeBase": self.include_base,
            "includePok": self.include_pok,
            "includeCodex1": self.include_codex1,
            "includeCodex2": self.include_codex2,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ModeConfig":
        """Create a mode config from its dictionary form."""
        return cls(
            include_base=bool(data.get("includeBase", False)),
            include_pok=bool(data.get("includePok", False)),
            include_codex1=bool(data.get("includeCodex1", False)),
            include_codex2=bool(data.get("includeCodex2", False)),
        )


def build_pool(mode: ModeConfig) -> list[Faction]:
    """Build the eligible faction pool for a mode.

    Args:
        mode: The room's mode configuration

    Returns:
        Every catalog faction whose source is enabled, in catalog order

    Raises:
        ConfigurationError: If the base game is not enabled
    """
    mode.validate()
    enabled = mode.enabled_sources()
    return [faction for faction in FACTIONS if faction.source in enabled]
