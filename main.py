#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty {easy,medium,hard}] [--seed N]
    python main.py simulate [--games N] [--width W --height H --mines M]
"""
import argparse
import logging
import sys
from typing import Optional

import numpy as np

from minefield import GameLogic, GameResult, GameSetting, MinesweeperEnv


PLAY_HELP = "Commands: r X Y (reveal), f X Y (flag), n (new game), q (quit)"


def build_setting(args: argparse.Namespace) -> Optional[GameSetting]:
    """Build the game setting from command line arguments."""
    if args.width is not None or args.height is not None or args.mines is not None:
        if args.width is None or args.height is None or args.mines is None:
            print("Custom games need --width, --height and --mines")
            return None
        setting = GameSetting.custom(args.width, args.height, args.mines)
    else:
        setting = GameSetting.from_name(args.difficulty)

    if setting is None or not setting.validate():
        print(f"Invalid game setting: {setting}")
        return None
    return setting


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    setting = build_setting(args)
    if setting is None:
        return

    logic = GameLogic(rng=np.random.default_rng(args.seed))
    logic.restart(setting)
    print(f"New game: {setting}")
    print(PLAY_HELP)

    while True:
        snapshot = logic.snapshot()
        print()
        print(snapshot.render())
        if snapshot.result == GameResult.WIN:
            print("\n*** WIN! ***")
        elif snapshot.result == GameResult.LOSE:
            print("\n*** LOST (hit mine) ***")
        else:
            print(f"Safe cells left: {logic.to_reveal_cell_num} | "
                  f"Flags: {logic.flag_count}/{setting.mine_count}")

        try:
            line = input("> ").strip().lower()
        except EOFError:
            break

        parts = line.split()
        if not parts:
            continue
        command = parts[0]

        if command == "q":
            break
        if command == "n":
            logic.restart()
            continue
        if command in ("r", "f") and len(parts) == 3:
            try:
                x, y = int(parts[1]), int(parts[2])
            except ValueError:
                print(PLAY_HELP)
                continue
            if command == "r":
                ok = logic.reveal(x, y)
            else:
                ok = logic.toggle_flag(x, y)
            if not ok:
                print(f"Cannot do that at ({x}, {y})")
            continue

        print(PLAY_HELP)


def simulate(args: argparse.Namespace) -> None:
    """Play games with uniformly random reveals and print statistics."""
    setting = build_setting(args)
    if setting is None:
        return
    if args.games < 1:
        print("--games must be at least 1")
        return

    env = MinesweeperEnv(setting=setting)
    rng = np.random.default_rng(args.seed)

    print(f"Simulating {args.games} random games on {setting}...")

    wins = 0
    total_revealed = 0
    total_steps = 0

    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        env.reset(seed=seed)
        done = False
        info = {}

        while not done:
            valid_actions = np.flatnonzero(env.get_action_mask())
            action = int(rng.choice(valid_actions))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if info["game_result"] == GameResult.WIN.name:
            wins += 1
        total_revealed += info["revealed"]
        total_steps += info["steps"]
        logging.debug("Game %d finished: %s", game + 1, info["game_result"])

    print(f"Results over {args.games} games:")
    print(f"  Win rate: {wins / args.games:.1%}")
    print(f"  Avg steps: {total_steps / args.games:.1f}")
    print(f"  Avg revealed: {total_revealed / args.games:.1f} cells")


def add_setting_arguments(parser: argparse.ArgumentParser) -> None:
    """Add game setting options to a subcommand parser."""
    parser.add_argument(
        "--difficulty",
        choices=["easy", "medium", "hard"],
        default="easy",
        help="Preset difficulty",
    )
    parser.add_argument("--width", type=int, help="Custom grid width")
    parser.add_argument("--height", type=int, help="Custom grid height")
    parser.add_argument("--mines", type=int, help="Custom mine count")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - Play or simulate games"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_setting_arguments(play_parser)

    # Simulate command
    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random games and report statistics"
    )
    add_setting_arguments(simulate_parser)
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    if args.command == "play":
        play(args)
    elif args.command == "simulate":
        simulate(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
