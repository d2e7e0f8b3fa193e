from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class EmptyMazeError(ValueError):
    """Raised when a game state is built from a maze with no rooms."""


class UnknownRoomError(LookupError):
    """Raised when the cursor points at a room id the maze does not contain."""

    def __init__(self, room_id: str) -> None:
        super().__init__(f"No room with id '{room_id}' in the maze")
        self.room_id = room_id


@dataclass
class Exit:
    label: str
    destination: str


@dataclass
class Room:
    id: str
    description: str
    exits: List[Exit] = field(default_factory=list)
    is_end: bool = False


@dataclass
class MazeFile:
    rooms: List[Room] = field(default_factory=list)


@dataclass
class GameState:
    rooms: List[Room]
    current_room_id: str
    is_finished: bool = False

    def current_room(self) -> Room:
        room = self._find_room(self.current_room_id)
        if room is None:
            raise UnknownRoomError(self.current_room_id)
        return room

    def choose_exit(self, index: int) -> None:
        room = self.current_room()
        if not 0 <= index < len(room.exits):
            return

        # read both before the cursor moves
        destination = room.exits[index].destination
        was_end = room.is_end

        self.current_room_id = destination
        target = self._find_room(destination)
        if target is None:
            logger.debug("Cursor moved to unknown room '%s'", destination)
        if was_end or (target is not None and target.is_end):
            self.is_finished = True

    def to_dict(self) -> Dict[str, object]:
        return {
            "rooms": [room_to_dict(room) for room in self.rooms],
            "current_room": self.current_room_id,
            "is_finished": self.is_finished,
        }

    def _find_room(self, room_id: str) -> Optional[Room]:
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None


def room_to_dict(room: Room) -> Dict[str, object]:
    return {
        "id": room.id,
        "description": room.description,
        "exits": [
            {"label": exit_.label, "destination": exit_.destination}
            for exit_ in room.exits
        ],
        "is_end": room.is_end,
    }


def build_initial_state(rooms: List[Room]) -> GameState:
    if not rooms:
        raise EmptyMazeError("Maze must have at least one room")
    return GameState(
        rooms=list(rooms),
        current_room_id=rooms[0].id,
        is_finished=False,
    )
