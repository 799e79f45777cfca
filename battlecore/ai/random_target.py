"""Uniform-random targeting AI."""

from __future__ import annotations

import random

from battlecore.ai.strategy import ShotStrategy
from battlecore.core.models import DEFAULT_COLS, DEFAULT_ROWS, Coord, Message


class RandomTargetAI(ShotStrategy):
    """Fires at a uniformly random cell it has not fired at before."""

    def __init__(
        self, rng: random.Random, y_dim: int = DEFAULT_ROWS, x_dim: int = DEFAULT_COLS
    ) -> None:
        self._rng = rng
        self._remaining: list[Coord] = [Coord(y, x) for y in range(y_dim) for x in range(x_dim)]
        self._rng.shuffle(self._remaining)

    @property
    def remaining(self) -> int:
        return len(self._remaining)

    def choose_shot(self) -> Coord:
        if not self._remaining:
            raise RuntimeError("No untargeted cells left.")
        return self._remaining[-1]

    def notify_result(self, coord: Coord, message: Message) -> None:
        # Rejected shots (wrong turn, game over) leave the cell available.
        if message in (Message.NOT_THIS_PLAYERS_TURN, Message.GAME_NOT_IN_PLAY):
            return
        if coord in self._remaining:
            self._remaining.remove(coord)
