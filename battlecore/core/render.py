"""Plain-text board rendering for debugging and the CLI."""

from __future__ import annotations

from battlecore.core.battle import Battle
from battlecore.core.board import Board
from battlecore.core.models import PlayerId


def board_codes(board: Board) -> list[str]:
    """One string of cell codes per row."""
    return ["".join(cell.code for cell in row) for row in board.rows()]


def format_board(board: Board, title: str = "") -> str:
    """Render a board with 1-based row and column numbers."""
    width = len(str(board.y_dim))
    header = " " * (width + 1) + " ".join(str((x + 1) % 10) for x in range(board.x_dim))
    if title:
        header = f"{header}  {title}"
    lines = [header]
    for y, row in enumerate(board_codes(board), start=1):
        lines.append(f"{y:>{width}} " + " ".join(row))
    return "\n".join(lines)


def format_battle(battle: Battle) -> str:
    sections = [f"Battle State {battle.phase.value}"]
    for player_id in PlayerId:
        sections.append(format_board(battle.board_of(player_id), player_id.value))
    return "\n\n".join(sections)
