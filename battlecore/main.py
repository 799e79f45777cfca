"""Self-play entry point: two random-targeting computers fight it out."""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Sequence

from battlecore.ai.random_target import RandomTargetAI
from battlecore.core.battle import Battle
from battlecore.core.models import Message, PlayerId
from battlecore.core.render import format_battle
from battlecore.infra.config import BattleSettings, load_default_env_files
from battlecore.infra.logging import setup_logging, shutdown_logging

logger = logging.getLogger(__name__)


def build_parser(settings: BattleSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="battlecore", description="Play a computer-vs-computer battle on random fleets."
    )
    parser.add_argument("--rows", type=int, default=settings.rows, help="Board rows.")
    parser.add_argument("--cols", type=int, default=settings.cols, help="Board columns.")
    parser.add_argument("--seed", type=int, default=settings.seed, help="Random seed.")
    parser.add_argument(
        "--show-boards", action="store_true", help="Print both boards after every shot."
    )
    parser.add_argument("--no-log-file", action="store_true", help="Only log to the console.")
    return parser


def play_self_game(battle: Battle, rng: random.Random, *, show_boards: bool = False) -> Battle:
    """Alternate uniform-random shots until one side has lost; Player1 opens."""
    strategies = {
        player_id: RandomTargetAI(rng, battle.y_dim, battle.x_dim) for player_id in PlayerId
    }
    shooter = PlayerId.PLAYER1
    while battle.winner() is None:
        target = shooter.opponent
        coord = strategies[shooter].choose_shot()
        result = battle.shoot(target, coord.y, coord.x)
        strategies[shooter].notify_result(coord, result.message)
        logger.info(
            "shot shooter=%s y=%d x=%d message=%s",
            shooter.value,
            coord.y,
            coord.x,
            result.message.value,
            extra={"sunk_ship": result.sunk_ship.name if result.sunk_ship else None},
        )
        battle = result.battle
        if show_boards:
            print(format_battle(battle), end="\n\n")
        shooter = target
    return battle


def main(argv: Sequence[str] | None = None) -> int:
    """Run one self-play game and print the final boards."""
    load_default_env_files(override_existing=False)
    parser = build_parser(BattleSettings.from_env())
    args = parser.parse_args(argv)
    if args.rows <= 0 or args.cols <= 0:
        parser.error("--rows and --cols must be positive")
    setup_logging(write_file=not args.no_log_file)
    try:
        return _run(args)
    finally:
        shutdown_logging()


def _run(args: argparse.Namespace) -> int:
    rng = random.Random(args.seed)
    battle = Battle.create(args.rows, args.cols)
    for player_id in PlayerId:
        result = battle.random_board(player_id, rng=rng)
        if result.message is not Message.ALL_SHIPS_PLACED:
            logger.error(
                "fleet_placement_failed player=%s rows=%d cols=%d",
                player_id.value,
                args.rows,
                args.cols,
            )
            return 1
        battle = result.battle

    battle = play_self_game(battle, rng, show_boards=args.show_boards)
    print(format_battle(battle))
    print(f"\nWinner: {battle.winner().value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
