import argparse
import json
import random
import sys
import time

from loguru import logger

from .config import config
from .game import Game
from .strategy import thinking_delay
from .types import Difficulty


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Simulate computer-only Ludo Rush games",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--players", type=int, default=config.NUM_PLAYERS, help="Seats at the table (2-4)"
    )
    parser.add_argument(
        "--ai",
        type=int,
        default=None,
        help="Computer-controlled seats (default: every seat)",
    )
    parser.add_argument(
        "--difficulty",
        type=str,
        choices=[d.value for d in Difficulty],
        default=config.DIFFICULTY,
    )
    parser.add_argument("--games", type=int, default=1, help="Number of games to play")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--max-turns", type=int, default=config.MAX_TURNS)
    parser.add_argument("--log-level", type=str, default=config.LOG_LEVEL)
    parser.add_argument(
        "--pace",
        action="store_true",
        help="Sleep the difficulty's thinking delay before each AI turn",
    )
    parser.add_argument("--json", action="store_true", help="Print summaries as JSON")
    return parser.parse_args(argv)


def play_one(args: argparse.Namespace, seed) -> Game:
    ai_count = args.players if args.ai is None else args.ai
    game = Game.new_game(
        player_count=args.players,
        ai_count=ai_count,
        difficulty=args.difficulty,
        seed=seed,
    )
    if not args.pace:
        game.play_until_over(args.max_turns)
        return game

    pacer = random.Random(seed)
    while not game.is_over and game.state.turn_count < args.max_turns:
        if not game.current_player.is_ai:
            break
        time.sleep(thinking_delay(game.difficulty, pacer))
        res = game.play_ai_turn()
        for event in res.events:
            logger.info(f"{event.type}: {event.payload}")
        if not res.accepted:
            break
    return game


def main(argv=None) -> None:
    args = parse_args(argv)
    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    print("--- Ludo Rush simulation ---")
    print(f"Players: {args.players}, difficulty: {args.difficulty}, games: {args.games}")

    start_time = time.time()
    wins: dict[str, int] = {}
    for idx in range(args.games):
        seed = None if args.seed is None else args.seed + idx
        game = play_one(args, seed)
        summary = game.summary()
        if summary is None:
            print(f"Game {idx + 1}: no winner after {game.state.turn_count} turns")
            continue

        wins[summary.winner_name] = wins.get(summary.winner_name, 0) + 1
        if args.json:
            print(json.dumps(summary.to_dict()))
            continue
        print(f"Game {idx + 1}: {summary.winner_name} won in {summary.turn_count} turns")
        for p in summary.players:
            print(
                f"  {p.name:<12} {p.color:<6} finished={p.finished_tokens} "
                f"captures={p.captures} coins={p.coins} best_streak={p.best_streak} "
                f"power_ups_used={p.power_ups_used}"
            )

    print(f"\nWins: {wins}")
    print(f"Simulation Time: {time.time() - start_time:.2f} seconds")


if __name__ == "__main__":
    main()
