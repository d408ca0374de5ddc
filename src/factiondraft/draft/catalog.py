"""Static faction catalog."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Source(Enum):
    """Content group a faction ships in."""

    BASE = "base"  # Base game
    POK = "pok"  # Prophecy of Kings expansion
    CODEX1 = "codex1"
    CODEX2 = "codex2"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Faction:
    """A playable faction.

    Attributes:
        id: Stable slug used by clients when submitting a pick
        name: Display name
        source: Content group the faction belongs to
    """

    id: str
    name: str
    source: Source

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"id": self.id, "name": self.name, "source": self.source.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Faction":
        """Create a faction from its dictionary form."""
        return cls(id=data["id"], name=data["name"], source=Source(data["source"]))


# Catalog order is the order pools are returned in
FACTIONS: tuple[Faction, ...] = (
    Faction("arborec", "The Arborec", Source.BASE),
    Faction("letnev", "The Barony of Letnev", Source.BASE),
    Faction("saar", "The Clan of Saar", Source.BASE),
    Faction("muaat", "The Embers of Muaat", Source.BASE),
    Faction("hacan", "The Emirates of Hacan", Source.BASE),
    Faction("sol", "The Federation of Sol", Source.BASE),
    Faction("creuss", "The Ghosts of Creuss", Source.BASE),
    Faction("l1z1x", "The L1Z1X Mindnet", Source.BASE),
    Faction("mentak", "The Mentak Coalition", Source.BASE),
    Faction("naalu", "The Naalu Collective", Source.BASE),
    Faction("nekro", "The Nekro Virus", Source.BASE),
    Faction("sardakk", "Sardakk N'orr", Source.BASE),
    Faction("jolnar", "The Universities of Jol-Nar", Source.BASE),
    Faction("winnu", "The Winnu", Source.BASE),
    Faction("xxcha", "The Xxcha Kingdom", Source.BASE),
    Faction("yin", "The Yin Brotherhood", Source.BASE),
    Faction("yssaril", "The Yssaril Tribes", Source.BASE),
    Faction("argent", "The Argent Flight", Source.POK),
    Faction("empyrean", "The Empyrean", Source.POK),
    Faction("mahact", "The Mahact Gene-Sorcerers", Source.POK),
    Faction("naazrokha", "The Naaz-Rokha Alliance", Source.POK),
    Faction("nomad", "The Nomad", Source.POK),
    Faction("titans", "The Titans of Ul", Source.POK),
    Faction("cabal", "The Vuil'raith Cabal", Source.POK),
    Faction("keleres-argent", "The Council Keleres (Argent)", Source.CODEX1),
    Faction("keleres-mentak", "The Council Keleres (Mentak)", Source.CODEX1),
    Faction("keleres-xxcha", "The Council Keleres (Xxcha)", Source.CODEX1),
    Faction("nekro-omega", "The Nekro Virus (Omega)", Source.CODEX2),
    Faction("naalu-omega", "The Naalu Collective (Omega)", Source.CODEX2),
)

_FACTIONS_BY_ID: dict[str, Faction] = {faction.id: faction for faction in FACTIONS}


def get_faction(faction_id: str) -> Faction | None:
    """Look up a catalog faction by id."""
    return _FACTIONS_BY_ID.get(faction_id)
