#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty {easy,medium,hard}] [--seed N]
    python main.py simulate [--games N] [--difficulty ...] [--seed N]
    python main.py tiers
"""
import argparse
import logging
import time

import numpy as np

from src.minesweeper.engine import Difficulty, STANDARD, TEST
from src.minesweeper.controller import GameController, MinesweeperEnv, Ticker
from src.minesweeper.controller.environment import render_ansi
from src.minesweeper.scoring import RunSubmission


def get_table(args: argparse.Namespace):
    """Difficulty table selected on the command line."""
    return TEST if args.test_tiers else STANDARD


def play(args: argparse.Namespace):
    """Play games in the terminal and return the last session."""
    controller = GameController(args.difficulty, get_table(args), seed=args.seed)
    ticker = None

    print("Commands: r ROW COL (reveal), f ROW COL (flag), n (new game), q (quit)")
    print(render_ansi(controller.observation()))

    while True:
        parts = input("\n> ").strip().lower().replace(",", " ").split()
        if not parts:
            continue
        command = parts[0]

        if command in {"q", "quit", "exit"}:
            print("Quit.")
            break
        if command == "n":
            if ticker is not None:
                ticker.stop()
                ticker = None
            session = controller.new_game()
        elif command in {"r", "f"} and len(parts) == 3:
            try:
                row, col = int(parts[1]), int(parts[2])
            except ValueError:
                print("Invalid input. Coordinates must be integers.")
                continue
            if command == "r":
                session = controller.reveal(row, col)
            else:
                session = controller.toggle_flag(row, col)
        else:
            print("Invalid input. Example: r 3 5")
            continue

        if session.is_running and (ticker is None or not ticker.is_alive):
            ticker = Ticker(controller).start()

        print(render_ansi(controller.observation()))
        print(f"Mines left: {session.mines_left} | Time: {session.timer}s")

        if session.game_over:
            if session.game_won:
                submission = RunSubmission.from_session(session, "terminal")
                print(f"\nYou won! Score: {session.score}")
                print(f"Ranked score: {submission.expected_score:.3f} ({submission.mode})")
            else:
                print("\nYou hit a mine. You lost.")
            print("Type n for a new game or q to quit.")

    if ticker is not None:
        ticker.stop()
    return controller.session


def simulate(args: argparse.Namespace) -> None:
    """Play random games through the automation environment."""
    env = MinesweeperEnv(args.difficulty, get_table(args))
    rng = np.random.default_rng(args.seed)

    wins = 0
    total_steps = 0
    start_time = time.time()

    for game in range(args.games):
        env.reset(seed=None if args.seed is None else args.seed + game)
        done = False
        info = {}

        while not done:
            mask = env.get_action_mask()
            # Random agent only reveals; flags never change the outcome
            valid = np.flatnonzero(mask[: env.config.total_cells])
            action = int(rng.choice(valid))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        total_steps += info["steps"]
        if info["game_state"] == "WON":
            wins += 1

    elapsed = time.time() - start_time
    print(f"Results for {args.games} random {args.difficulty} games:")
    print(f"  Win rate: {wins / args.games:.1%}")
    print(f"  Avg steps: {total_steps / args.games:.1f}")
    print(f"  Speed: {args.games / max(elapsed, 1e-9):.1f} games/s")


def tiers(args: argparse.Namespace) -> None:
    """List difficulty tiers."""
    table = get_table(args)
    print(f"{'Tier':<10} {'Rows':>5} {'Cols':>5} {'Mines':>6}")
    for name in table:
        config = table.resolve(name)
        print(f"{name:<10} {config.rows:>5} {config.cols:>5} {config.mines:>6}")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper board engine")
    parser.add_argument(
        "--test-tiers", action="store_true", help="Use the small test boards"
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    difficulties = [tier.value for tier in Difficulty]

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--difficulty", choices=difficulties, default="easy")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random games and report the win rate"
    )
    simulate_parser.add_argument("--difficulty", choices=difficulties, default="easy")
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    simulate_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    subparsers.add_parser("tiers", help="List difficulty tiers")

    args = parser.parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "simulate":
        simulate(args)
    elif args.command == "tiers":
        tiers(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
