"""Human-versus-computer battle flow on top of immutable battle snapshots."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from battlecore.ai.random_target import RandomTargetAI
from battlecore.ai.strategy import ShotStrategy
from battlecore.core.battle import Battle, OperationResult
from battlecore.core.diff import diff_boards
from battlecore.core.models import (
    DEFAULT_COLS,
    DEFAULT_ROWS,
    RESOLVED_SHOT_MESSAGES,
    Coord,
    Message,
    PlayerId,
)

logger = logging.getLogger(__name__)

WIN_TEXT = "Game Over and You Won! Play again?"
LOSS_TEXT = "Sorry you have been beaten! Do you want to try one more time?"


@dataclass(frozen=True, slots=True)
class TurnReport:
    """Outcome of a human shot plus the computer's reply, if any."""

    player_result: OperationResult
    reply_result: OperationResult | None
    enemy_changes: list[Coord]
    own_changes: list[Coord]
    winner: PlayerId | None


class BattleFlow:
    """Keeps the current snapshot of a game against a random-targeting computer.

    The computer's fleet is placed once per game; the human fleet can be
    re-rolled on top of it until the first shot is fired.
    """

    def __init__(
        self,
        rng: random.Random,
        y_dim: int = DEFAULT_ROWS,
        x_dim: int = DEFAULT_COLS,
        human: PlayerId = PlayerId.PLAYER1,
    ) -> None:
        self._rng = rng
        self._y_dim = y_dim
        self._x_dim = x_dim
        self.human = human
        self.computer = human.opponent
        self._enemy_start = Battle.create(y_dim, x_dim)
        self._battle = self._enemy_start
        self._ai: ShotStrategy = RandomTargetAI(rng, y_dim, x_dim)
        self.started = False

    @property
    def battle(self) -> Battle:
        return self._battle

    def restart(self) -> OperationResult:
        """Start over with a fresh random fleet for the computer."""
        result = Battle.create(self._y_dim, self._x_dim).random_board(self.computer, rng=self._rng)
        if result.message is not Message.ALL_SHIPS_PLACED:
            logger.warning(
                "computer_fleet_placement_failed rows=%d cols=%d", self._y_dim, self._x_dim
            )
        self._enemy_start = result.battle
        self._battle = result.battle
        self._ai = RandomTargetAI(self._rng, self._y_dim, self._x_dim)
        self.started = False
        return result

    def randomize_player_fleet(self) -> OperationResult:
        """Place a new random human fleet against the computer's starting fleet.

        Once the first shot has been fired the game is left alone and
        GameNotInPlay is returned with the current snapshot.
        """
        if self.started:
            logger.debug("player_fleet_reroll_refused phase=%s", self._battle.phase.value)
            return OperationResult(Message.GAME_NOT_IN_PLAY, self._battle)
        result = self._enemy_start.random_board(self.human, rng=self._rng)
        self._battle = result.battle
        self._ai = RandomTargetAI(self._rng, self._y_dim, self._x_dim)
        self.started = False
        return result

    def fire(self, y: int, x: int) -> TurnReport:
        """Fire at the computer's board; the computer answers an accepted shot."""
        before = self._battle
        player_result = before.shoot(self.computer, y, x)
        self._battle = player_result.battle
        reply_result: OperationResult | None = None
        if player_result.message in RESOLVED_SHOT_MESSAGES:
            self.started = True
            logger.debug(
                "player_shot y=%d x=%d message=%s", y, x, player_result.message.value
            )
            if self._battle.winner() is None:
                reply_result = self._computer_turn()

        winner = self._battle.winner()
        if winner is not None and before.winner() is None:
            logger.info("game_over winner=%s", winner.value)
        return TurnReport(
            player_result=player_result,
            reply_result=reply_result,
            enemy_changes=diff_boards(
                before.board_of(self.computer), self._battle.board_of(self.computer)
            ),
            own_changes=diff_boards(before.board_of(self.human), self._battle.board_of(self.human)),
            winner=winner,
        )

    def game_over_text(self) -> str | None:
        winner = self._battle.winner()
        if winner is None:
            return None
        return WIN_TEXT if winner is self.human else LOSS_TEXT

    def _computer_turn(self) -> OperationResult:
        coord = self._ai.choose_shot()
        result = self._battle.shoot(self.human, coord.y, coord.x)
        self._ai.notify_result(coord, result.message)
        self._battle = result.battle
        logger.debug("computer_shot y=%d x=%d message=%s", coord.y, coord.x, result.message.value)
        return result
