"""Shot outcome evaluation (hit/miss/sink/repeat)."""

from __future__ import annotations

from dataclasses import dataclass

from battlecore.core.board import Board, cells_of_kind, distinct_nominal_kinds, has_nominal_kind
from battlecore.core.models import MISS, Cell, CellState, Coord, Message, ShipKind


@dataclass(frozen=True, slots=True)
class ShotOutcome:
    """Resolved shot against one board."""

    message: Message
    board: Board
    sunk_ship: ShipKind | None = None
    owner_lost: bool = False


def sink_ship(board: Board, kind: ShipKind) -> Board:
    """Flip every section of a ship kind to sunk."""
    sunk = Cell.sunk(kind)
    return board.with_cells({coord: sunk for coord in cells_of_kind(board, kind)})


def resolve_shot(board: Board, coord: Coord) -> ShotOutcome:
    """Resolve a shot against a board. The coordinate must be in bounds."""
    cell = board.cell_at(coord)
    match cell.state:
        case CellState.SHIP_NOMINAL:
            kind = cell.kind
            updated = board.with_cells({coord: Cell.damaged(kind)})
            if has_nominal_kind(updated, kind):
                return ShotOutcome(Message.HIT, updated)
            updated = sink_ship(updated, kind)
            return ShotOutcome(
                Message.HIT,
                updated,
                sunk_ship=kind,
                owner_lost=distinct_nominal_kinds(updated) == 0,
            )
        case CellState.SHIP_DAMAGED | CellState.SHIP_SUNK:
            return ShotOutcome(Message.HIT_SAME_SPOT, board)
        case CellState.WATER:
            return ShotOutcome(Message.MISS, board.with_cells({coord: MISS}))
        case CellState.MISS:
            return ShotOutcome(Message.MISS_SAME_SPOT, board)
