"""Write the built-in maze to maze.json as a template for custom mazes.

Usage:
    python3 scripts/export_default_maze.py              # writes ./maze.json at the repo root
    python3 scripts/export_default_maze.py -o my.json   # choose the output file
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mazegame import default_rooms, save_maze
from mazegame.loader import MAZE_FILENAME


def main(argv: List[str]) -> int:
    parser = argparse.ArgumentParser(description="Export the built-in maze as JSON")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=ROOT / MAZE_FILENAME,
        help="where to write the maze file",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="overwrite the output file if it already exists",
    )
    args = parser.parse_args(argv)

    if args.output.exists() and not args.force:
        print(f"{args.output} already exists; pass --force to overwrite.")
        return 1

    save_maze(default_rooms(), args.output)
    print("Wrote", args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
