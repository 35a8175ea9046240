#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--height H] [--width W] [--mines N] [--seed S]
    python main.py watch [--games G] [--delay D]
"""
import argparse
import logging
import random
import time

import numpy as np

from minesweeper import BoardConfig, GameSession, InvalidConfigurationError, MinesweeperEnv
from minesweeper import console


def play(args: argparse.Namespace, config: BoardConfig) -> None:
    """Play interactively in the terminal."""
    rng = random.Random(args.seed) if args.seed is not None else None
    session = GameSession(config, rng=rng)
    console.run(session, tick_rate=args.tick_rate)


def watch(args: argparse.Namespace, config: BoardConfig) -> None:
    """Watch random clicks play through the environment."""
    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(args.seed)
    wins = 0

    for game in range(args.games):
        env.reset(seed=None if args.seed is None else args.seed + game)
        done = False
        step = 0

        while not done:
            valid_indices = np.where(env.get_action_mask())[0]
            action = int(rng.choice(valid_indices))
            row, col = divmod(action, config.width)

            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            print(f"=== Game {game + 1}/{args.games} | Step {step} ===")
            print(f"Last move: ({row}, {col})\n")
            print(env.render())

            if done:
                if info.get("game_state") == "WON":
                    wins += 1
                    print("\n*** WIN! ***")
                else:
                    print("\n*** LOST (hit mine) ***")

            time.sleep(args.delay)

    print(f"\n=== Final: {wins}/{args.games} wins ===")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper")
    parser.add_argument("--height", type=int, default=18, help="Board rows")
    parser.add_argument("--width", type=int, default=27, help="Board columns")
    parser.add_argument("--mines", type=int, default=100, help="Number of mines")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level (e.g. INFO, DEBUG)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--tick-rate", type=float, default=console.DEFAULT_TICK_RATE,
        help="Explosion animation ticks per second",
    )

    watch_parser = subparsers.add_parser("watch", help="Watch random play")
    watch_parser.add_argument(
        "--games", type=int, default=3, help="Number of games"
    )
    watch_parser.add_argument(
        "--delay", type=float, default=0.3, help="Delay between moves"
    )

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper())

    try:
        config = BoardConfig(
            width=args.width, height=args.height, num_mines=args.mines
        )
    except InvalidConfigurationError as exc:
        parser.error(str(exc))

    if args.command == "play":
        play(args, config)
    elif args.command == "watch":
        watch(args, config)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
