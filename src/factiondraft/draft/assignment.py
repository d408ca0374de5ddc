"""Private option assignment for the draft."""

import random
from collections.abc import Sequence

from factiondraft.draft.catalog import Faction
from factiondraft.errors import InsufficientPoolError

OPTIONS_PER_PLAYER = 2


def assign_options(
    player_ids: Sequence[str],
    pool: Sequence[Faction],
    rng: random.Random | None = None,
) -> dict[str, list[Faction]]:
    """Deal each player a private pair of factions.

    The pool is shuffled (Fisher-Yates via ``random.shuffle``) and cut into
    consecutive pairs; pair ``i`` goes to ``player_ids[i]``. Since the pairs
    partition a permutation, no faction is dealt twice.

    Args:
        player_ids: Player ids in roster order
        pool: Eligible factions
        rng: Random source; defaults to the OS entropy source

    Returns:
        Mapping of player id to that player's two options

    Raises:
        InsufficientPoolError: If the pool has fewer than two factions per player
    """
    required = len(player_ids) * OPTIONS_PER_PLAYER
    if len(pool) < required:
        raise InsufficientPoolError(required=required, available=len(pool))

    if rng is None:
        rng = random.SystemRandom()

    shuffled = list(pool)
    rng.shuffle(shuffled)

    options: dict[str, list[Faction]] = {}
    for index, player_id in enumerate(player_ids):
        start = index * OPTIONS_PER_PLAYER
        options[player_id] = shuffled[start : start + OPTIONS_PER_PLAYER]
    return options
