"""Ship placement validation."""

from __future__ import annotations

from battlecore.core.board import Board
from battlecore.core.models import WATER, Cell, Coord, ShipKind


def cells_for_placement(kind: ShipKind, origin: Coord, vertical: bool) -> list[Coord]:
    """Compute the cells a ship would occupy, extending along +y or +x from origin."""
    if vertical:
        return [Coord(origin.y + i, origin.x) for i in range(kind.length)]
    return [Coord(origin.y, origin.x + i) for i in range(kind.length)]


def try_placement(board: Board, kind: ShipKind, origin: Coord, vertical: bool) -> list[Coord] | None:
    """Return the ship's cells if it fits entirely on open water, else None.

    Ships may touch each other; only overlap and leaving the board are rejected.
    """
    cells = cells_for_placement(kind, origin, vertical)
    for cell in cells:
        if not board.in_bounds(cell):
            return None
        if board.cell_at(cell) != WATER:
            return None
    return cells


def place_ship(board: Board, kind: ShipKind, cells: list[Coord]) -> Board:
    """Commit a validated placement onto a new board."""
    nominal = Cell.nominal(kind)
    return board.with_cells({cell: nominal for cell in cells})
