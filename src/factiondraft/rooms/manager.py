"""Room manager for the faction draft.

This module provides the RoomManager class, the state machine that owns a
room's lifecycle: players gather in the lobby, the host starts the draft,
every player gets two private options, and the room closes once everyone
has picked.

Rooms live in a RoomStore. Every mutating operation runs its
read-validate-write under a per-room lock and writes with compare-and-swap
on the room version, so concurrent requests against one room never lose
an update.
"""

import asyncio
import logging
import random
import uuid
import weakref
from collections.abc import Callable
from typing import Any, TypeVar

from factiondraft.draft.assignment import assign_options
from factiondraft.draft.catalog import Faction
from factiondraft.draft.pool import ModeConfig, build_pool
from factiondraft.errors import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    StaleRoomError,
    ValidationError,
)
from factiondraft.rooms.models import Player, Room, RoomStatus
from factiondraft.rooms.store import RoomStore

logger = logging.getLogger(__name__)

# Characters for room codes (excluding ambiguous: O/0, I/1/L)
ROOM_CODE_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
ROOM_CODE_LENGTH = 6

# Attempts per operation before giving up on a room that keeps changing
MAX_WRITE_ATTEMPTS = 3

T = TypeVar("T")


def normalize_code(code: str | None) -> str:
    """Canonicalize a user-supplied room code."""
    return (code or "").strip().upper()


def is_valid_code(code: str) -> bool:
    """Check that a normalized code has the shape of a generated one."""
    return len(code) == ROOM_CODE_LENGTH and all(c in ROOM_CODE_ALPHABET for c in code)


def _clean_name(name: str | None) -> str:
    return (name or "").strip()


class RoomManager:
    """Runs the room state machine against a room store.

    States are lobby -> drafting -> closed:
    - lobby: players join; the host may start the draft
    - drafting: options are dealt; each player submits one pick
    - closed: every player has picked (terminal)
    """

    def __init__(
        self,
        store: RoomStore,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the room manager.

        Args:
            store: Where rooms are kept
            rng: Random source for codes, player ids and shuffling. Defaults to
                the OS entropy source; pass a seeded ``random.Random`` in tests.
        """
        self._store = store
        self._rng = rng if rng is not None else random.SystemRandom()
        # Entries go away once no operation holds the lock
        self._room_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._create_lock = asyncio.Lock()

    @property
    def store(self) -> RoomStore:
        """The backing room store."""
        return self._store

    def _generate_code(self) -> str:
        return "".join(self._rng.choices(ROOM_CODE_ALPHABET, k=ROOM_CODE_LENGTH))

    def _generate_player_id(self) -> str:
        return str(uuid.UUID(int=self._rng.getrandbits(128), version=4))

    def _room_lock(self, code: str) -> asyncio.Lock:
        lock = self._room_locks.get(code)
        if lock is None:
            lock = asyncio.Lock()
            self._room_locks[code] = lock
        return lock

    async def _load(self, code: str) -> Room:
        if not is_valid_code(code):
            raise NotFoundError("Room not found.")
        room = await self._store.get(code)
        if room is None:
            raise NotFoundError("Room not found.")
        return room

    async def _update_room(self, code: str, apply: Callable[[Room], T]) -> tuple[Room, T]:
        """Load a room, apply a change and write it back.

        ``apply`` validates and mutates the loaded copy, raising a DraftError
        to reject the operation. Nothing is written unless it returns. A write
        that loses a compare-and-swap is retried against the fresh room.

        Returns:
            Tuple of (updated Room, value returned by apply)
        """
        if not is_valid_code(code):
            raise NotFoundError("Room not found.")

        async with self._room_lock(code):
            for attempt in range(1, MAX_WRITE_ATTEMPTS + 1):
                room = await self._load(code)
                expected_version = room.version
                result = apply(room)
                room.version = expected_version + 1
                try:
                    await self._store.put(room, expected_version=expected_version)
                except StaleRoomError as e:
                    logger.warning(f"{e} (attempt {attempt}/{MAX_WRITE_ATTEMPTS})")
                    continue
                return room, result

        raise ConflictError("Room is busy, please retry.")

    async def create_room(self, host_name: str, mode: ModeConfig) -> tuple[Room, Player]:
        """Create a new room with the caller as host.

        Args:
            host_name: Display name for the host
            mode: Content groups to draft from

        Returns:
            Tuple of (Room, host Player)

        Raises:
            ValidationError: If the host name is empty
            ConfigurationError: If the mode does not include the base game
        """
        name = _clean_name(host_name)
        if not name:
            raise ValidationError("Host name is required.")
        mode.validate()

        async with self._create_lock:
            for attempt in range(1, MAX_WRITE_ATTEMPTS + 1):
                # Generate unique code
                code = self._generate_code()
                while await self._store.exists(code):
                    code = self._generate_code()

                host = Player(id=self._generate_player_id(), name=name)
                room = Room(
                    code=code,
                    host_id=host.id,
                    mode=mode,
                    players=[host],
                    version=1,
                )
                try:
                    await self._store.put(room, expected_version=0)
                except StaleRoomError as e:
                    logger.warning(f"{e} (attempt {attempt}/{MAX_WRITE_ATTEMPTS})")
                    continue

                logger.info(f"Room {code} created by {name}")
                return room, host

        raise ConflictError("Could not allocate a room code, please retry.")

    async def join_room(self, code: str, player_name: str) -> tuple[Room, Player]:
        """Join a room that is still in the lobby.

        Args:
            code: Room code (any case)
            player_name: Display name

        Returns:
            Tuple of (Room, new Player)

        Raises:
            NotFoundError: If the room does not exist
            InvalidStateError: If the draft has already started
            ValidationError: If the name is empty
        """
        code = normalize_code(code)
        name = _clean_name(player_name)

        def apply(room: Room) -> Player:
            if room.status != RoomStatus.LOBBY:
                raise InvalidStateError("Room is not open for joining.")
            if not name:
                raise ValidationError("Player name is required.")

            player_id = self._generate_player_id()
            while room.has_player(player_id):
                player_id = self._generate_player_id()

            player = Player(id=player_id, name=name)
            room.players.append(player)
            return player

        room, player = await self._update_room(code, apply)
        logger.info(f"Player {name} joined room {code} ({room.total_count} players)")
        return room, player

    async def get_status(self, code: str, player_id: str) -> dict[str, Any]:
        """Get a player's view of a room.

        The view holds the public room summary plus the caller's own options
        and pick. Other players' options and picks are never included.

        Raises:
            NotFoundError: If the room does not exist
            ForbiddenError: If the player is not in the room
        """
        room = await self._load(normalize_code(code))
        if not room.has_player(player_id):
            raise ForbiddenError("Player not in room.")
        return room.view_for(player_id)

    async def start_draft(self, code: str, host_id: str) -> Room:
        """Deal private options and move the room to drafting (host only).

        Raises:
            NotFoundError: If the room does not exist
            ForbiddenError: If the caller is not the host
            InvalidStateError: If the room is not in the lobby
            ConfigurationError: If the room's mode is invalid
            InsufficientPoolError: If the pool is too small for the roster
        """
        code = normalize_code(code)

        def apply(room: Room) -> None:
            if room.host_id != host_id:
                raise ForbiddenError("Only the host can start the draft.")
            if room.status != RoomStatus.LOBBY:
                raise InvalidStateError("Draft already started or room closed.")

            pool = build_pool(room.mode)
            room.options_by_player = assign_options(room.player_ids, pool, rng=self._rng)
            room.status = RoomStatus.DRAFTING

        room, _ = await self._update_room(code, apply)
        logger.info(f"Draft started in room {code} with {room.total_count} players")
        return room

    async def submit_pick(self, code: str, player_id: str, faction_id: str) -> Room:
        """Record a player's pick from their private options.

        Closes the room when the last player picks.

        Raises:
            NotFoundError: If the room does not exist
            InvalidStateError: If the room is not drafting
            ConflictError: If the player already picked
            ForbiddenError: If the player was not dealt options
            ValidationError: If the faction is not one of the player's options
        """
        code = normalize_code(code)

        def apply(room: Room) -> None:
            if room.status != RoomStatus.DRAFTING:
                raise InvalidStateError("Draft is not active.")
            if player_id in room.picks_by_player:
                raise ConflictError("Pick already submitted.")

            options = room.options_by_player.get(player_id)
            if not options:
                raise ForbiddenError("No options assigned for this player.")

            picked = next((f for f in options if f.id == faction_id), None)
            if picked is None:
                raise ValidationError("Selected faction is not in your private options.")

            room.picks_by_player[player_id] = picked
            if room.all_picked:
                room.status = RoomStatus.CLOSED

        room, _ = await self._update_room(code, apply)
        logger.info(f"Pick submitted in room {code} ({room.submitted_count}/{room.total_count})")
        if room.status == RoomStatus.CLOSED:
            logger.info(f"Draft complete in room {code}")
        return room

    async def list_picks(self, code: str) -> dict[str, Faction]:
        """Get every pick made in a room, keyed by player id.

        Reveals hidden picks; only for debugging.

        Raises:
            NotFoundError: If the room does not exist
        """
        room = await self._load(normalize_code(code))
        return dict(room.picks_by_player)
