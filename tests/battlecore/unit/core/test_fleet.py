import random

from battlecore.core.battle import Battle
from battlecore.core.board import cells_of_kind, distinct_placed_kinds
from battlecore.core.models import ALL_SHIP_KINDS, Cell, Coord, Message, Phase, PlayerId, ShipKind


def test_random_board_for_both_players_completes_setup(seeded_rng) -> None:
    battle = Battle.create()
    first = battle.random_board(PlayerId.PLAYER1, rng=seeded_rng)
    assert first.message is Message.ALL_SHIPS_PLACED
    assert first.battle.phase is Phase.SETUP
    second = first.battle.random_board(PlayerId.PLAYER2, rng=seeded_rng)
    assert second.message is Message.ALL_SHIPS_PLACED
    assert second.battle.phase is Phase.SETUP_COMPLETE
    for player_id in PlayerId:
        board = second.battle.board_of(player_id)
        assert distinct_placed_kinds(board) == len(ALL_SHIP_KINDS)
        for kind in ALL_SHIP_KINDS:
            assert len(cells_of_kind(board, kind)) == kind.length


def test_random_board_places_contiguous_straight_ships(seeded_rng) -> None:
    board = Battle.create(6, 6).random_board(PlayerId.PLAYER1, rng=seeded_rng).battle.board_of(
        PlayerId.PLAYER1
    )
    for kind in ALL_SHIP_KINDS:
        cells = cells_of_kind(board, kind)
        rows = {cell.y for cell in cells}
        cols = {cell.x for cell in cells}
        assert len(rows) == 1 or len(cols) == 1
        span = (max(cell.x for cell in cells) - min(cell.x for cell in cells)) + (
            max(cell.y for cell in cells) - min(cell.y for cell in cells)
        )
        assert span == kind.length - 1


def test_random_board_is_reproducible_with_seed() -> None:
    first = Battle.create().random_board(PlayerId.PLAYER1, rng=random.Random(7))
    second = Battle.create().random_board(PlayerId.PLAYER1, rng=random.Random(7))
    assert first.battle.board_of(PlayerId.PLAYER1) == second.battle.board_of(PlayerId.PLAYER1)


def test_random_board_without_kinds_is_immediate_success(empty_battle, seeded_rng) -> None:
    result = empty_battle.random_board(PlayerId.PLAYER1, kinds=(), rng=seeded_rng)
    assert result.message is Message.ALL_SHIPS_PLACED
    assert result.battle is empty_battle


def test_random_board_subset_of_kinds(empty_battle, seeded_rng) -> None:
    result = empty_battle.random_board(
        PlayerId.PLAYER2, kinds=(ShipKind.CRUISER, ShipKind.PATROL), rng=seeded_rng
    )
    assert result.message is Message.ALL_SHIPS_PLACED
    assert distinct_placed_kinds(result.battle.board_of(PlayerId.PLAYER2)) == 2
    assert distinct_placed_kinds(result.battle.board_of(PlayerId.PLAYER1)) == 0


def test_random_board_tries_other_orientation_when_first_does_not_fit() -> None:
    # A single column only ever fits the carrier vertically, whatever orientation is drawn first.
    for seed in range(20):
        battle = Battle.create(5, 1)
        result = battle.random_board(PlayerId.PLAYER1, kinds=(ShipKind.CARRIER,), rng=random.Random(seed))
        assert result.message is Message.ALL_SHIPS_PLACED
        assert len(cells_of_kind(result.battle.board_of(PlayerId.PLAYER1), ShipKind.CARRIER)) == 5


def test_random_board_reports_failure_when_fleet_cannot_fit(seeded_rng) -> None:
    battle = Battle.create(3, 3)
    result = battle.random_board(PlayerId.PLAYER1, rng=seeded_rng)
    assert result.message is Message.SHIP_NOT_ALLOWED_HERE
    assert result.battle is battle


def test_random_board_backtracks_on_tight_board(seeded_rng) -> None:
    # 15 cells for 15 ship sections: only perfect packings succeed.
    battle = Battle.create(3, 5)
    result = battle.random_board(PlayerId.PLAYER1, rng=seeded_rng)
    assert result.message is Message.ALL_SHIPS_PLACED
    board = result.battle.board_of(PlayerId.PLAYER1)
    assert all(board[coord].is_ship for coord in board.coords())


def test_random_board_after_fleet_complete(ready_battle, seeded_rng) -> None:
    result = ready_battle.random_board(PlayerId.PLAYER1, rng=seeded_rng)
    assert result.message is Message.ALL_SHIPS_PLACED
    assert result.battle is ready_battle


def test_random_board_completes_a_partly_placed_fleet() -> None:
    battle = Battle.create(10, 10).add_ship(ShipKind.PATROL, PlayerId.PLAYER1, 0, 0).battle
    result = battle.random_board(PlayerId.PLAYER1, rng=random.Random(1))
    assert result.message is Message.ALL_SHIPS_PLACED
    board = result.battle.board_of(PlayerId.PLAYER1)
    assert distinct_placed_kinds(board) == len(ALL_SHIP_KINDS)
    assert cells_of_kind(board, ShipKind.PATROL) == [Coord(0, 0), Coord(0, 1)]
    assert board[Coord(0, 0)] == Cell.nominal(ShipKind.PATROL)


def test_random_board_skips_repeated_and_placed_kinds(empty_battle, seeded_rng) -> None:
    placed = empty_battle.add_ship(ShipKind.PATROL, PlayerId.PLAYER1, 0, 0).battle
    kinds = (ShipKind.PATROL, ShipKind.CRUISER, ShipKind.CRUISER)
    result = placed.random_board(PlayerId.PLAYER1, kinds=kinds, rng=seeded_rng)
    assert result.message is Message.ALL_SHIPS_PLACED
    board = result.battle.board_of(PlayerId.PLAYER1)
    assert distinct_placed_kinds(board) == 2
    assert len(cells_of_kind(board, ShipKind.CRUISER)) == ShipKind.CRUISER.length


def test_random_board_with_only_placed_kinds_keeps_snapshot(empty_battle, seeded_rng) -> None:
    placed = empty_battle.add_ship(ShipKind.PATROL, PlayerId.PLAYER1, 0, 0).battle
    result = placed.random_board(PlayerId.PLAYER1, kinds=(ShipKind.PATROL,), rng=seeded_rng)
    assert result.message is Message.ALL_SHIPS_PLACED
    assert result.battle is placed
