from __future__ import annotations

import logging
import random

import pytest

from battlecore.core.battle import Battle, OperationResult
from battlecore.core.models import ShipKind, PlayerId


def add_row_fleet(battle: Battle, player_id: PlayerId) -> OperationResult:
    """One ship per row, longest in row 0, all starting at column 0."""
    result = battle.add_ship(ShipKind.CARRIER, player_id, 0, 0)
    result = result.battle.add_ship(ShipKind.BATTLESHIP, player_id, 1, 0)
    result = result.battle.add_ship(ShipKind.SUBMARINE, player_id, 2, 0)
    result = result.battle.add_ship(ShipKind.CRUISER, player_id, 3, 0)
    return result.battle.add_ship(ShipKind.PATROL, player_id, 4, 0)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def empty_battle() -> Battle:
    return Battle.create(5, 5)


@pytest.fixture
def ready_battle() -> Battle:
    """5x5 battle with the row fleet placed for both players."""
    battle = add_row_fleet(Battle.create(5, 5), PlayerId.PLAYER1).battle
    return add_row_fleet(battle, PlayerId.PLAYER2).battle


@pytest.fixture
def row_fleet():
    return add_row_fleet


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
