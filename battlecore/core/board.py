"""Board state representation and board-level queries."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

import numpy as np

from battlecore.core.models import (
    ALL_SHIP_KINDS,
    BoardSetupState,
    Cell,
    CellState,
    Coord,
    PlayerId,
    ShipKind,
)

_STATE_CODES: dict[CellState, int] = {state: idx for idx, state in enumerate(CellState)}
_STATES_BY_CODE: tuple[CellState, ...] = tuple(CellState)
# Kind code 0 means "no ship".
_KIND_CODES: dict[ShipKind, int] = {kind: idx for idx, kind in enumerate(ShipKind, start=1)}
_KINDS_BY_CODE: dict[int, ShipKind] = {code: kind for kind, code in _KIND_CODES.items()}

_NOMINAL = _STATE_CODES[CellState.SHIP_NOMINAL]


def _frozen(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


@dataclass(frozen=True, slots=True, eq=False)
class Board:
    """Immutable numpy-backed grid of cells for one player.

    Writeable layers passed in are copied and frozen; the caller's arrays are
    left untouched.
    """

    states: np.ndarray
    kinds: np.ndarray

    def __post_init__(self) -> None:
        if self.states.shape != self.kinds.shape or self.states.ndim != 2:
            raise ValueError("Board state and kind layers must be matching 2D arrays.")
        for name in ("states", "kinds"):
            layer = getattr(self, name)
            if layer.flags.writeable:
                object.__setattr__(self, name, _frozen(layer.copy()))

    @classmethod
    def empty(cls, y_dim: int, x_dim: int) -> Board:
        """Return an all-water board."""
        if y_dim <= 0 or x_dim <= 0:
            raise ValueError(f"Board dimensions must be positive, got {y_dim}x{x_dim}.")
        return cls(
            states=_frozen(np.full((y_dim, x_dim), _STATE_CODES[CellState.WATER], dtype=np.int8)),
            kinds=_frozen(np.zeros((y_dim, x_dim), dtype=np.int8)),
        )

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> Board:
        """Build a board from rows of cell codes, e.g. ``["AA_~", "____"]``."""
        if not rows or len({len(row) for row in rows}) != 1:
            raise ValueError("Rows must be non-empty and of equal length.")
        board = cls.empty(len(rows), len(rows[0]))
        return board.with_cells(
            {Coord(y, x): Cell.from_code(code) for y, row in enumerate(rows) for x, code in enumerate(row)}
        )

    @property
    def y_dim(self) -> int:
        return int(self.states.shape[0])

    @property
    def x_dim(self) -> int:
        return int(self.states.shape[1])

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in board bounds."""
        return 0 <= coord.y < self.y_dim and 0 <= coord.x < self.x_dim

    def cell_at(self, coord: Coord) -> Cell:
        if not self.in_bounds(coord):
            raise IndexError(f"Coordinate ({coord.y}, {coord.x}) is off the board.")
        kind_code = int(self.kinds[coord.y, coord.x])
        return Cell(
            _STATES_BY_CODE[int(self.states[coord.y, coord.x])],
            _KINDS_BY_CODE[kind_code] if kind_code else None,
        )

    def __getitem__(self, coord: Coord) -> Cell:
        return self.cell_at(coord)

    def coords(self) -> Iterator[Coord]:
        """Iterate every coordinate in row-major order."""
        for y in range(self.y_dim):
            for x in range(self.x_dim):
                yield Coord(y, x)

    def rows(self) -> list[list[Cell]]:
        return [[self.cell_at(Coord(y, x)) for x in range(self.x_dim)] for y in range(self.y_dim)]

    def with_cells(self, updates: Mapping[Coord, Cell]) -> Board:
        """Return a copy of this board with the given cells replaced."""
        states = self.states.copy()
        kinds = self.kinds.copy()
        for coord, cell in updates.items():
            states[coord.y, coord.x] = _STATE_CODES[cell.state]
            kinds[coord.y, coord.x] = _KIND_CODES[cell.kind] if cell.kind is not None else 0
        return Board(states=_frozen(states), kinds=_frozen(kinds))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(
            np.array_equal(self.states, other.states) and np.array_equal(self.kinds, other.kinds)
        )

    def __hash__(self) -> int:
        return hash((self.states.shape, self.states.tobytes(), self.kinds.tobytes()))

    def __repr__(self) -> str:
        rows = ["".join(cell.code for cell in row) for row in self.rows()]
        return f"Board({rows!r})"


def _kinds_from_codes(codes: Iterable[int]) -> set[ShipKind]:
    return {_KINDS_BY_CODE[int(code)] for code in codes if int(code)}


def placed_kinds(board: Board) -> set[ShipKind]:
    """Kinds with at least one cell on the board, in any damage state."""
    return _kinds_from_codes(np.unique(board.kinds))


def nominal_kinds(board: Board) -> set[ShipKind]:
    """Kinds with at least one undamaged cell."""
    return _kinds_from_codes(np.unique(board.kinds[board.states == _NOMINAL]))


def distinct_placed_kinds(board: Board) -> int:
    return len(placed_kinds(board))


def distinct_nominal_kinds(board: Board) -> int:
    """Zero means the board's owner has lost."""
    return len(nominal_kinds(board))


def has_kind(board: Board, kind: ShipKind) -> bool:
    return bool(np.any(board.kinds == _KIND_CODES[kind]))


def has_nominal_kind(board: Board, kind: ShipKind) -> bool:
    return bool(np.any((board.kinds == _KIND_CODES[kind]) & (board.states == _NOMINAL)))


def cells_of_kind(board: Board, kind: ShipKind) -> list[Coord]:
    """Coordinates occupied by a ship kind, row-major."""
    return [Coord(int(y), int(x)) for y, x in np.argwhere(board.kinds == _KIND_CODES[kind])]


def setup_state(board: Board) -> BoardSetupState:
    if distinct_placed_kinds(board) == len(ALL_SHIP_KINDS):
        return BoardSetupState.SETUP_COMPLETE
    return BoardSetupState.SETUP


@dataclass(frozen=True, slots=True)
class BoardStore:
    """Both players' boards; replaced wholesale, never mutated."""

    boards: Mapping[PlayerId, Board] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "boards", MappingProxyType(dict(self.boards)))

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.boards.items())))

    @classmethod
    def create(cls, y_dim: int, x_dim: int) -> BoardStore:
        board = Board.empty(y_dim, x_dim)
        return cls(boards={PlayerId.PLAYER1: board, PlayerId.PLAYER2: board})

    def board_for(self, player_id: PlayerId) -> Board:
        return self.boards[player_id]

    def with_board(self, player_id: PlayerId, board: Board) -> BoardStore:
        boards = dict(self.boards)
        boards[player_id] = board
        return BoardStore(boards=boards)

    def state_for(self, player_id: PlayerId) -> BoardSetupState:
        return setup_state(self.board_for(player_id))

    def setup_complete(self) -> bool:
        """Return whether every player has placed every ship kind."""
        return all(
            self.state_for(player_id) is BoardSetupState.SETUP_COMPLETE for player_id in PlayerId
        )
