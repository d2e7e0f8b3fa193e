from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .models import (
    Exit,
    GameState,
    MazeFile,
    Room,
    build_initial_state,
    room_to_dict,
)

logger = logging.getLogger(__name__)

MAZE_FILENAME = "maze.json"
MAZE_PATH_ENV = "MAZE_FILE"

PathLike = Union[str, Path]


class LoadError(Exception):
    """Raised when a maze file cannot be turned into a game state."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class MazeNotFoundError(LoadError):
    """The maze file does not exist."""


class MazeUnreadableError(LoadError):
    """The maze file exists but could not be read."""


class MalformedMazeError(LoadError):
    """The maze file content is not a valid maze definition."""


# Parsing ------------------------------------------------------------------
def _require(cfg: Dict[str, Any], key: str, kind: type, where: str) -> Any:
    if key not in cfg:
        raise MalformedMazeError(f"{where}: missing field '{key}'")
    value = cfg[key]
    if not isinstance(value, kind):
        raise MalformedMazeError(
            f"{where}: field '{key}' must be {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _parse_exit(exit_cfg: Any, where: str) -> Exit:
    if not isinstance(exit_cfg, dict):
        raise MalformedMazeError(f"{where}: exit must be an object")
    return Exit(
        label=_require(exit_cfg, "label", str, where),
        destination=_require(exit_cfg, "destination", str, where),
    )


def _parse_room(room_cfg: Any, position: int) -> Room:
    if not isinstance(room_cfg, dict):
        raise MalformedMazeError(f"room #{position}: must be an object")
    room_id = _require(room_cfg, "id", str, f"room #{position}")
    where = f"room '{room_id}'"
    exits_cfg = _require(room_cfg, "exits", list, where)
    is_end = room_cfg.get("is_end", False)
    if not isinstance(is_end, bool):
        raise MalformedMazeError(f"{where}: field 'is_end' must be bool")
    return Room(
        id=room_id,
        description=_require(room_cfg, "description", str, where),
        exits=[
            _parse_exit(exit_cfg, f"{where} exit #{index}")
            for index, exit_cfg in enumerate(exits_cfg)
        ],
        is_end=is_end,
    )


def parse_maze(metadata: Any) -> MazeFile:
    if not isinstance(metadata, dict):
        raise MalformedMazeError("Maze definition must be a JSON object")
    rooms_cfg = _require(metadata, "rooms", list, "maze")
    if not rooms_cfg:
        raise MalformedMazeError("Maze must have at least one room")

    rooms: List[Room] = []
    seen: Dict[str, int] = {}
    for position, room_cfg in enumerate(rooms_cfg):
        room = _parse_room(room_cfg, position)
        if room.id in seen:
            raise MalformedMazeError(
                f"Duplicate room id '{room.id}' (rooms #{seen[room.id]} and #{position})"
            )
        seen[room.id] = position
        rooms.append(room)

    for room in rooms:
        for exit_ in room.exits:
            if exit_.destination not in seen:
                logger.warning(
                    "Exit '%s' in room '%s' leads to unknown room '%s'",
                    exit_.label,
                    room.id,
                    exit_.destination,
                )
    return MazeFile(rooms=rooms)


def load_from_file(path: PathLike) -> GameState:
    path = Path(path)
    try:
        data = path.read_bytes()
    except FileNotFoundError as exc:
        raise MazeNotFoundError(f"Maze file not found: {path}", path) from exc
    except OSError as exc:
        raise MazeUnreadableError(f"Failed to read maze file {path}: {exc}", path) from exc

    try:
        metadata = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        raise MalformedMazeError(f"Invalid JSON in {path}: {exc}", path) from exc

    try:
        maze = parse_maze(metadata)
    except MalformedMazeError as exc:
        raise MalformedMazeError(f"{path}: {exc}", path) from exc
    return from_rooms(maze.rooms)


# Construction -------------------------------------------------------------
def from_rooms(rooms: Sequence[Room]) -> GameState:
    return build_initial_state(list(rooms))


def default_rooms() -> List[Room]:
    return [
        Room(
            id="start",
            description="You are in a small stone chamber with one door ahead.",
            exits=[Exit(label="Go through the door", destination="middle")],
        ),
        Room(
            id="middle",
            description="You stand in a long hallway. There is a door behind and one ahead.",
            exits=[
                Exit(label="Go back", destination="start"),
                Exit(label="Go forward", destination="end"),
            ],
        ),
        Room(
            id="end",
            description="You find yourself in a bright room, the end of the maze!",
            exits=[],
            is_end=True,
        ),
    ]


def new_game() -> GameState:
    return from_rooms(default_rooms())


# Serialization ------------------------------------------------------------
def maze_to_dict(rooms: Sequence[Room]) -> Dict[str, Any]:
    return {"rooms": [room_to_dict(room) for room in rooms]}


def save_maze(rooms: Sequence[Room], path: PathLike) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(maze_to_dict(rooms), indent=2) + "\n", encoding="utf-8")


# Startup ------------------------------------------------------------------
def resolve_maze_path(directory: PathLike) -> Path:
    override = os.environ.get(MAZE_PATH_ENV)
    if override:
        return Path(override)
    return Path(directory) / MAZE_FILENAME


def load_startup_state(path: Optional[PathLike], *, explicit: bool = False) -> GameState:
    if path is None or not Path(path).exists():
        level = logging.WARNING if explicit and path is not None else logging.DEBUG
        logger.log(level, "No maze file at %s, using default maze", path)
        return new_game()
    try:
        return load_from_file(path)
    except LoadError as exc:
        logger.warning("Error loading %s: %s. Using default maze.", Path(path).name, exc)
        return new_game()
