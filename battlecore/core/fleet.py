"""Random fleet placement by backtracking search."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from battlecore.core.board import has_kind
from battlecore.core.models import Coord, Message, PlayerId, ShipKind
from battlecore.core.placement import try_placement

if TYPE_CHECKING:
    from battlecore.core.battle import Battle

logger = logging.getLogger(__name__)


def random_fleet_for(
    battle: Battle,
    player_id: PlayerId,
    kinds: tuple[ShipKind, ...],
    rng: random.Random,
) -> Battle | None:
    """Place ``kinds`` in order at random positions, backtracking on dead ends.

    Kinds already on the player's board are skipped.
    One orientation is drawn per ship; its shuffled candidates are tried first
    and the other orientation only once they are exhausted. Returns None when
    no arrangement fits.
    """
    if not kinds:
        return battle

    kind, rest = kinds[0], kinds[1:]
    if has_kind(battle.board_of(player_id), kind):
        return random_fleet_for(battle, player_id, rest, rng)

    first_vertical = rng.random() < 0.5
    for vertical in (first_vertical, not first_vertical):
        for origin in _candidate_origins(battle, player_id, kind, vertical, rng):
            placed = battle.add_ship(kind, player_id, origin.y, origin.x, vertical)
            if placed.message is not Message.SHIP_PLACED:
                logger.warning(
                    "random_fleet_unexpected_rejection kind=%s origin=(%d, %d) message=%s",
                    kind.name,
                    origin.y,
                    origin.x,
                    placed.message.value,
                )
                continue
            result = random_fleet_for(placed.battle, player_id, rest, rng)
            if result is not None:
                return result

    logger.debug(
        "random_fleet_exhausted player=%s kind=%s remaining=%d",
        player_id.value,
        kind.name,
        len(rest),
    )
    return None


def _candidate_origins(
    battle: Battle,
    player_id: PlayerId,
    kind: ShipKind,
    vertical: bool,
    rng: random.Random,
) -> list[Coord]:
    board = battle.board_of(player_id)
    candidates = [
        origin
        for origin in board.coords()
        if try_placement(board, kind, origin, vertical) is not None
    ]
    rng.shuffle(candidates)
    return candidates
