"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

DEFAULT_ROWS = 10
DEFAULT_COLS = 10


class ShipKind(StrEnum):
    """The five ship kinds, valued by their board letter."""

    CARRIER = "A"
    BATTLESHIP = "B"
    SUBMARINE = "S"
    CRUISER = "C"
    PATROL = "P"

    @property
    def length(self) -> int:
        return SHIP_LENGTHS[self]

    @property
    def letter(self) -> str:
        return self.value


SHIP_LENGTHS: dict[ShipKind, int] = {
    ShipKind.CARRIER: 5,
    ShipKind.BATTLESHIP: 4,
    ShipKind.SUBMARINE: 3,
    ShipKind.CRUISER: 2,
    ShipKind.PATROL: 1,
}

# Longest first; the random generator relies on this order.
ALL_SHIP_KINDS: tuple[ShipKind, ...] = (
    ShipKind.CARRIER,
    ShipKind.BATTLESHIP,
    ShipKind.SUBMARINE,
    ShipKind.CRUISER,
    ShipKind.PATROL,
)


class CellState(StrEnum):
    """What occupies a single board cell."""

    WATER = "WATER"
    MISS = "MISS"
    SHIP_NOMINAL = "SHIP_NOMINAL"
    SHIP_DAMAGED = "SHIP_DAMAGED"
    SHIP_SUNK = "SHIP_SUNK"


_SHIP_STATES = frozenset({CellState.SHIP_NOMINAL, CellState.SHIP_DAMAGED, CellState.SHIP_SUNK})


@dataclass(frozen=True, slots=True)
class Cell:
    """Content of one coordinate; ship states carry their ship kind."""

    state: CellState
    kind: ShipKind | None = None

    def __post_init__(self) -> None:
        if (self.state in _SHIP_STATES) != (self.kind is not None):
            raise ValueError(f"Invalid cell: {self.state.value} with kind {self.kind!r}.")

    @classmethod
    def nominal(cls, kind: ShipKind) -> Cell:
        return cls(CellState.SHIP_NOMINAL, kind)

    @classmethod
    def damaged(cls, kind: ShipKind) -> Cell:
        return cls(CellState.SHIP_DAMAGED, kind)

    @classmethod
    def sunk(cls, kind: ShipKind) -> Cell:
        return cls(CellState.SHIP_SUNK, kind)

    @classmethod
    def from_code(cls, code: str) -> Cell:
        """Parse a textual cell code.

        ``X`` is rejected: a damaged section does not say which ship it belongs to.
        """
        if code == "_":
            return WATER
        if code == "~":
            return MISS
        if code.upper() in _KINDS_BY_LETTER:
            kind = _KINDS_BY_LETTER[code.upper()]
            return cls.nominal(kind) if code.isupper() else cls.sunk(kind)
        raise ValueError(f"Unknown cell code: {code!r}.")

    @property
    def is_ship(self) -> bool:
        return self.state in _SHIP_STATES

    @property
    def is_nominal(self) -> bool:
        return self.state is CellState.SHIP_NOMINAL

    @property
    def code(self) -> str:
        """Single-character code used by text renderers."""
        match self.state:
            case CellState.WATER:
                return "_"
            case CellState.MISS:
                return "~"
            case CellState.SHIP_NOMINAL:
                return self.kind.letter
            case CellState.SHIP_DAMAGED:
                return "X"
            case CellState.SHIP_SUNK:
                return self.kind.letter.lower()

    def __str__(self) -> str:
        return self.code


_KINDS_BY_LETTER: dict[str, ShipKind] = {kind.letter: kind for kind in ShipKind}

WATER = Cell(CellState.WATER)
MISS = Cell(CellState.MISS)


class PlayerId(StrEnum):
    """Allowed players."""

    PLAYER1 = "Player1"
    PLAYER2 = "Player2"

    @property
    def opponent(self) -> PlayerId:
        return PlayerId.PLAYER2 if self is PlayerId.PLAYER1 else PlayerId.PLAYER1


class Phase(StrEnum):
    """Game phase; only ever moves forward."""

    SETUP = "Setup"
    SETUP_COMPLETE = "SetupComplete"
    PLAYING = "Playing"
    GAME_OVER = "GameOver"


class BoardSetupState(StrEnum):
    """Per-board placement progress."""

    SETUP = "Setup"
    SETUP_COMPLETE = "SetupComplete"


class Message(StrEnum):
    """Outcome code of a battle operation."""

    HIT = "Hit"
    MISS = "Miss"
    HIT_SAME_SPOT = "HitSameSpot"
    MISS_SAME_SPOT = "MissSameSpot"
    SHOT_OUT_OF_BOUNDS = "ShotOutOfBounds"
    SHIP_NOT_ALLOWED_HERE = "ShipNotAllowedHere"
    SHIP_ALREADY_PLACED = "ShipAlreadyPlaced"
    SHIP_PLACED = "ShipPlaced"
    ALL_SHIPS_PLACED = "AllShipsPlaced"
    GAME_NOT_IN_PLAY = "GameNotInPlay"
    NOT_THIS_PLAYERS_TURN = "NotThisPlayersTurn"


# Outcomes of a shot that was accepted and consumed the firing player's turn.
RESOLVED_SHOT_MESSAGES = frozenset(
    {Message.HIT, Message.MISS, Message.HIT_SAME_SPOT, Message.MISS_SAME_SPOT}
)


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate, row (y) first."""

    y: int
    x: int
