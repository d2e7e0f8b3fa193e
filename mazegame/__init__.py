"""Room-graph maze engine: load a maze, walk its exits, detect the end."""

from .engine import (
    ChooseExit,
    CommandResponse,
    GameAction,
    GameSession,
    Restart,
    parse_action,
)
from .loader import (
    LoadError,
    MalformedMazeError,
    MazeNotFoundError,
    MazeUnreadableError,
    default_rooms,
    from_rooms,
    load_from_file,
    load_startup_state,
    maze_to_dict,
    new_game,
    parse_maze,
    resolve_maze_path,
    save_maze,
)
from .models import (
    EmptyMazeError,
    Exit,
    GameState,
    MazeFile,
    Room,
    UnknownRoomError,
    build_initial_state,
)

__all__ = [
    "ChooseExit",
    "CommandResponse",
    "GameAction",
    "GameSession",
    "Restart",
    "parse_action",
    "LoadError",
    "MalformedMazeError",
    "MazeNotFoundError",
    "MazeUnreadableError",
    "default_rooms",
    "from_rooms",
    "load_from_file",
    "load_startup_state",
    "maze_to_dict",
    "new_game",
    "parse_maze",
    "resolve_maze_path",
    "save_maze",
    "EmptyMazeError",
    "Exit",
    "GameState",
    "MazeFile",
    "Room",
    "UnknownRoomError",
    "build_initial_state",
]
