from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from mazegame import GameSession, load_startup_state, resolve_maze_path
from mazegame.loader import MAZE_PATH_ENV

ROOT = Path(__file__).resolve().parent


def run_cli(game: GameSession) -> None:
    print("Welcome to the Maze Game")
    print(game.describe_current_room())
    while True:
        try:
            raw = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if raw.lower() in {"quit", "exit"}:
            print("Goodbye.")
            return
        response = game.handle_command(raw)
        print(response.output)


def build_game(maze_path: Optional[Path] = None) -> GameSession:
    explicit = maze_path is not None or bool(os.environ.get(MAZE_PATH_ENV))
    path = maze_path if maze_path is not None else resolve_maze_path(ROOT)
    return GameSession(load_startup_state(path, explicit=explicit))


def main(argv: List[str]) -> int:
    parser = argparse.ArgumentParser(description="Walk through a maze of rooms")
    parser.add_argument(
        "--maze",
        type=Path,
        default=None,
        help="maze JSON file (default: maze.json next to this program, or $MAZE_FILE)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="diagnostic verbosity on stderr",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    run_cli(build_game(args.maze))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
