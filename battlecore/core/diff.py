"""Cell-level change detection between two boards."""

from __future__ import annotations

import numpy as np

from battlecore.core.board import Board
from battlecore.core.models import Coord


def diff_boards(old: Board, new: Board) -> list[Coord]:
    """Return coordinates whose cell differs between two boards, row-major."""
    if old.states.shape != new.states.shape:
        raise ValueError(
            f"Cannot diff boards of different shapes: {old.states.shape} vs {new.states.shape}."
        )
    changed = (old.states != new.states) | (old.kinds != new.kinds)
    return [Coord(int(y), int(x)) for y, x in np.argwhere(changed)]


def diff_indices(old: Board, new: Board) -> list[int]:
    """Changed cells as flat row-major indices, for list-backed grid views."""
    return [coord.y * new.x_dim + coord.x for coord in diff_boards(old, new)]
