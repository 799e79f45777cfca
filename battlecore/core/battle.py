"""Immutable battle snapshots and their transition rules.

A :class:`Battle` is one point in time of a game. Every operation returns an
:class:`OperationResult` holding the outcome message and the snapshot to continue
from; rejected operations hand back the very same snapshot. Snapshots are never
mutated, so callers can keep old ones around for history or undo.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass

from battlecore.core.board import Board, BoardStore, has_kind
from battlecore.core.fleet import random_fleet_for
from battlecore.core.models import (
    ALL_SHIP_KINDS,
    DEFAULT_COLS,
    DEFAULT_ROWS,
    BoardSetupState,
    Coord,
    Message,
    Phase,
    PlayerId,
    ShipKind,
)
from battlecore.core.placement import place_ship, try_placement
from battlecore.core.shot_resolution import resolve_shot


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome of an operation along with the battle to continue from."""

    message: Message
    battle: Battle
    sunk_ship: ShipKind | None = None


@dataclass(frozen=True, slots=True)
class Battle:
    """One immutable point in time of a two-player battle."""

    store: BoardStore
    phase: Phase = Phase.SETUP
    last_shooter: PlayerId | None = None

    @classmethod
    def create(cls, y_dim: int = DEFAULT_ROWS, x_dim: int = DEFAULT_COLS) -> Battle:
        """Start a battle with two empty boards in the setup phase."""
        return cls(store=BoardStore.create(y_dim, x_dim))

    @property
    def y_dim(self) -> int:
        return self.store.board_for(PlayerId.PLAYER1).y_dim

    @property
    def x_dim(self) -> int:
        return self.store.board_for(PlayerId.PLAYER1).x_dim

    def board_of(self, player_id: PlayerId) -> Board:
        return self.store.board_for(player_id)

    def winner(self) -> PlayerId | None:
        """The player who fired the winning shot, once the game is over."""
        if self.phase is Phase.GAME_OVER:
            return self.last_shooter
        return None

    def add_ship(
        self, kind: ShipKind, player_id: PlayerId, y: int, x: int, vertical: bool = False
    ) -> OperationResult:
        """Place a ship during setup, if it is not placed yet and fits on open water."""
        if self.store.state_for(player_id) is BoardSetupState.SETUP_COMPLETE:
            return OperationResult(Message.ALL_SHIPS_PLACED, self)
        board = self.board_of(player_id)
        if has_kind(board, kind):
            return OperationResult(Message.SHIP_ALREADY_PLACED, self)

        cells = try_placement(board, kind, Coord(y, x), vertical)
        if cells is None:
            return OperationResult(Message.SHIP_NOT_ALLOWED_HERE, self)
        return OperationResult(
            Message.SHIP_PLACED,
            self._next(player_id, place_ship(board, kind, cells), fired_by=None),
        )

    def shoot(self, target_player_id: PlayerId, y: int, x: int) -> OperationResult:
        """Fire at the target player's board on behalf of their opponent.

        The first shot of the game may come from either side; after that the
        players must alternate.
        """
        firing_player_id = target_player_id.opponent
        if self.phase not in (Phase.SETUP_COMPLETE, Phase.PLAYING):
            return OperationResult(Message.GAME_NOT_IN_PLAY, self)
        if self.last_shooter is firing_player_id:
            return OperationResult(Message.NOT_THIS_PLAYERS_TURN, self)

        board = self.board_of(target_player_id)
        coord = Coord(y, x)
        if not board.in_bounds(coord):
            return OperationResult(Message.SHOT_OUT_OF_BOUNDS, self)

        outcome = resolve_shot(board, coord)
        return OperationResult(
            outcome.message,
            self._next(
                target_player_id,
                outcome.board,
                fired_by=firing_player_id,
                did_lose=outcome.owner_lost,
            ),
            sunk_ship=outcome.sunk_ship,
        )

    def random_board(
        self,
        player_id: PlayerId,
        kinds: Sequence[ShipKind] = ALL_SHIP_KINDS,
        *,
        rng: random.Random | None = None,
    ) -> OperationResult:
        """Randomly place the given ship kinds for a player.

        Kinds already on the board are kept where they are, so a partly placed
        fleet is completed. Returns ShipNotAllowedHere with this snapshot when
        the remaining kinds cannot all be fitted on the board.
        """
        if self.store.state_for(player_id) is BoardSetupState.SETUP_COMPLETE:
            return OperationResult(Message.ALL_SHIPS_PLACED, self)

        placed = random_fleet_for(self, player_id, tuple(kinds), rng or random.Random())
        if placed is None:
            return OperationResult(Message.SHIP_NOT_ALLOWED_HERE, self)
        return OperationResult(Message.ALL_SHIPS_PLACED, placed)

    def _next(
        self,
        player_id: PlayerId,
        board: Board,
        *,
        fired_by: PlayerId | None,
        did_lose: bool = False,
    ) -> Battle:
        store = self.store.with_board(player_id, board)
        phase = self.phase
        if phase is Phase.SETUP and store.setup_complete():
            phase = Phase.SETUP_COMPLETE
        if phase is Phase.SETUP_COMPLETE and fired_by is not None:
            phase = Phase.PLAYING
        if phase is Phase.PLAYING and did_lose:
            phase = Phase.GAME_OVER
        return Battle(
            store=store,
            phase=phase,
            last_shooter=fired_by if fired_by is not None else self.last_shooter,
        )
