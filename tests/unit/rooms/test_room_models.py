"""Tests for room data models."""

from datetime import datetime

from factiondraft.draft.catalog import get_faction
from factiondraft.draft.pool import ModeConfig
from factiondraft.rooms.models import Player, Room, RoomStatus


def make_drafting_room() -> Room:
    """A two-player room with options dealt and one pick in."""
    alice = Player(id="alice", name="Alice", joined_at=datetime(2024, 1, 1, 12, 0))
    bob = Player(id="bob", name="Bob", joined_at=datetime(2024, 1, 1, 12, 1))
    return Room(
        code="ABCDEF",
        host_id="alice",
        mode=ModeConfig(include_pok=True),
        status=RoomStatus.DRAFTING,
        players=[alice, bob],
        options_by_player={
            "alice": [get_faction("sol"), get_faction("hacan")],
            "bob": [get_faction("nomad"), get_faction("winnu")],
        },
        picks_by_player={"bob": get_faction("winnu")},
        created_at=datetime(2024, 1, 1, 12, 0),
        version=4,
    )


class TestRoom:
    """Tests for the Room dataclass."""

    def test_defaults(self) -> None:
        """Test a freshly created room."""
        host = Player(id="h", name="Host")
        room = Room(code="ABCDEF", host_id="h", mode=ModeConfig(), players=[host])

        assert room.status == RoomStatus.LOBBY
        assert room.host == host
        assert room.options_by_player == {}
        assert room.picks_by_player == {}
        assert room.total_count == 1
        assert room.submitted_count == 0
        assert not room.all_picked

    def test_counts(self) -> None:
        """Test pick counters."""
        room = make_drafting_room()
        assert room.submitted_count == 1
        assert room.total_count == 2
        assert not room.all_picked

        room.picks_by_player["alice"] = get_faction("sol")
        assert room.all_picked

    def test_copy_is_independent(self) -> None:
        """Test that mutating a copy leaves the original alone."""
        room = make_drafting_room()
        clone = room.copy()

        clone.players.append(Player(id="carol", name="Carol"))
        clone.options_by_player["alice"].append(get_faction("yin"))
        clone.picks_by_player["alice"] = get_faction("sol")
        clone.status = RoomStatus.CLOSED

        assert len(room.players) == 2
        assert len(room.options_by_player["alice"]) == 2
        assert "alice" not in room.picks_by_player
        assert room.status == RoomStatus.DRAFTING

    def test_dict_round_trip(self) -> None:
        """Test that the persisted record restores the same room."""
        room = make_drafting_room()
        data = room.to_dict()

        assert data["hostId"] == "alice"
        assert data["status"] == "drafting"
        assert data["mode"]["includePok"] is True
        assert data["picksByPlayer"]["bob"]["id"] == "winnu"
        assert Room.from_dict(data) == room


class TestViewFor:
    """Tests for the per-player status view."""

    def test_view_only_contains_own_options(self) -> None:
        """Test that another player's options never appear."""
        room = make_drafting_room()
        view = room.view_for("alice")

        assert [f["id"] for f in view["self"]["options"]] == ["sol", "hacan"]
        assert view["self"]["picked"] is None
        serialized = repr(view)
        assert "nomad" not in serialized
        assert "winnu" not in serialized

    def test_view_hides_who_picked(self) -> None:
        """Test that the summary only reports the aggregate count."""
        room = make_drafting_room()
        summary = room.view_for("alice")["room"]

        assert summary["submittedCount"] == 1
        assert summary["totalCount"] == 2
        assert "picksByPlayer" not in summary
        assert "optionsByPlayer" not in summary

    def test_options_cleared_after_pick(self) -> None:
        """Test that a player who picked sees their pick, not their options."""
        room = make_drafting_room()
        view = room.view_for("bob")

        assert view["self"]["options"] == []
        assert view["self"]["picked"]["id"] == "winnu"

    def test_lobby_view_has_no_options(self) -> None:
        """Test the view before the draft starts."""
        host = Player(id="h", name="Host")
        room = Room(code="ABCDEF", host_id="h", mode=ModeConfig(), players=[host])
        view = room.view_for("h")

        assert view["room"]["status"] == "lobby"
        assert view["room"]["players"][0]["name"] == "Host"
        assert view["self"] == {"playerId": "h", "options": [], "picked": None}
