"""Room data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from factiondraft.draft.catalog import Faction
from factiondraft.draft.pool import ModeConfig


class RoomStatus(Enum):
    """Room lifecycle status. Only ever moves forward."""

    LOBBY = "lobby"  # Accepting players
    DRAFTING = "drafting"  # Options dealt, collecting picks
    CLOSED = "closed"  # Every player has picked


def _utcnow() -> datetime:
    return datetime.utcnow()


@dataclass(frozen=True)
class Player:
    """A player in a room.

    Attributes:
        id: Opaque identifier, unique within the room
        name: Display name (trimmed, non-empty)
        joined_at: When the player joined
    """

    id: str
    name: str
    joined_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "joinedAt": self.joined_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Player":
        """Create a player from its dictionary form."""
        return cls(
            id=data["id"],
            name=data["name"],
            joined_at=datetime.fromisoformat(data["joinedAt"]),
        )


@dataclass
class Room:
    """A draft room.

    Attributes:
        code: Short join code (e.g., "K7MQ2P")
        host_id: Player id of the room creator
        mode: Content groups the draft pool is built from
        status: Current lifecycle status
        players: Players in join order; the host is first
        options_by_player: Player id -> two private options (set at draft start)
        picks_by_player: Player id -> chosen faction
        created_at: When the room was created
        version: Incremented on every write, used for compare-and-swap
    """

    code: str
    host_id: str
    mode: ModeConfig
    status: RoomStatus = RoomStatus.LOBBY
    players: list[Player] = field(default_factory=list)
    options_by_player: dict[str, list[Faction]] = field(default_factory=dict)
    picks_by_player: dict[str, Faction] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_utcnow)
    version: int = 0

    @property
    def host(self) -> Player | None:
        """Get the host player."""
        return self.get_player(self.host_id)

    @property
    def player_ids(self) -> list[str]:
        """Get player ids in join order."""
        return [p.id for p in self.players]

    @property
    def submitted_count(self) -> int:
        """Number of players who have picked."""
        return len(self.picks_by_player)

    @property
    def total_count(self) -> int:
        """Number of players in the room."""
        return len(self.players)

    @property
    def all_picked(self) -> bool:
        """Check if every player has submitted a pick."""
        return bool(self.players) and self.submitted_count == self.total_count

    def get_player(self, player_id: str) -> Player | None:
        """Find a player by id."""
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def has_player(self, player_id: str) -> bool:
        """Check if a player id belongs to this room."""
        return self.get_player(player_id) is not None

    def copy(self) -> "Room":
        """Create a copy that shares no mutable containers with this room."""
        return Room(
            code=self.code,
            host_id=self.host_id,
            mode=self.mode,
            status=self.status,
            players=list(self.players),
            options_by_player={pid: list(opts) for pid, opts in self.options_by_player.items()},
            picks_by_player=dict(self.picks_by_player),
            created_at=self.created_at,
            version=self.version,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the full persisted record.

        This includes every player's options and picks. Use ``view_for`` for
        anything sent to a client.
        """
        return {
            "code": self.code,
            "hostId": self.host_id,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
            "mode": self.mode.to_dict(),
            "players": [p.to_dict() for p in self.players],
            "optionsByPlayer": {
                pid: [f.to_dict() for f in opts] for pid, opts in self.options_by_player.items()
            },
            "picksByPlayer": {pid: f.to_dict() for pid, f in self.picks_by_player.items()},
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Room":
        """Create a room from its persisted record."""
        return cls(
            code=data["code"],
            host_id=data["hostId"],
            mode=ModeConfig.from_dict(data["mode"]),
            status=RoomStatus(data["status"]),
            players=[Player.from_dict(p) for p in data.get("players", [])],
            options_by_player={
                pid: [Faction.from_dict(f) for f in opts]
                for pid, opts in data.get("optionsByPlayer", {}).items()
            },
            picks_by_player={
                pid: Faction.from_dict(f) for pid, f in data.get("picksByPlayer", {}).items()
            },
            created_at=datetime.fromisoformat(data["createdAt"]),
            version=data.get("version", 0),
        )

    def public_summary(self) -> dict[str, Any]:
        """Summary visible to every member: no options, no per-player picks."""
        return {
            "code": self.code,
            "hostId": self.host_id,
            "status": self.status.value,
            "players": [p.to_dict() for p in self.players],
            "mode": self.mode.to_dict(),
            "submittedCount": self.submitted_count,
            "totalCount": self.total_count,
        }

    def view_for(self, player_id: str) -> dict[str, Any]:
        """Build the status view for one player.

        Only the caller's own options and pick are included. Options are
        shown only while the caller still has a pick to make.
        """
        picked = self.picks_by_player.get(player_id)
        options: list[Faction] = []
        if self.status == RoomStatus.DRAFTING and picked is None:
            options = self.options_by_player.get(player_id, [])

        return {
            "room": self.public_summary(),
            "self": {
                "playerId": player_id,
                "options": [f.to_dict() for f in options],
                "picked": picked.to_dict() if picked else None,
            },
        }
