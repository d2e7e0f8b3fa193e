from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from .loader import new_game
from .models import GameState

logger = logging.getLogger(__name__)

RESTART_COMMANDS = {"restart", "reset", "new"}


@dataclass(frozen=True)
class Restart:
    """Throw the current state away and start the built-in maze again."""


@dataclass(frozen=True)
class ChooseExit:
    """Follow the exit at ``index`` (0-based) in the current room."""

    index: int


GameAction = Union[Restart, ChooseExit]


def parse_action(raw_input: str) -> Optional[GameAction]:
    command = raw_input.strip().lower()
    if command in RESTART_COMMANDS:
        return Restart()
    # exits are numbered from 1 on screen
    if command.isdecimal() and int(command) > 0:
        return ChooseExit(int(command) - 1)
    return None


@dataclass
class CommandResponse:
    output: str
    handled: bool = True


class GameSession:
    """Owns the single live game state for one shell.

    Shells read through ``describe_current_room`` / ``view_state`` first and
    only then hand the collected action to ``apply``.
    """

    def __init__(
        self,
        state: Optional[GameState] = None,
        *,
        state_factory: Callable[[], GameState] = new_game,
    ) -> None:
        self.state_factory = state_factory
        self.state: GameState = state if state is not None else state_factory()

    # Public API -----------------------------------------------------------
    def apply(self, action: GameAction) -> None:
        if isinstance(action, Restart):
            logger.info("Restarting with a fresh maze")
            self.state = self.state_factory()
        elif isinstance(action, ChooseExit):
            self.state.choose_exit(action.index)
        else:
            raise TypeError(f"Unsupported action: {action!r}")
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("State after %r: %s", action, self.state.to_dict())

    def handle_command(self, raw_input: str) -> CommandResponse:
        command = raw_input.strip().lower()
        if not command or command in {"look", "l"}:
            return CommandResponse(self.describe_current_room())
        if command == "help":
            return CommandResponse(self.describe_help())

        action = parse_action(command)
        if action is None:
            return CommandResponse(
                f"I don't understand '{raw_input.strip()}'. Type 'help' for commands.",
                handled=False,
            )
        if isinstance(action, ChooseExit):
            exits = self.state.current_room().exits
            if action.index >= len(exits):
                return CommandResponse(
                    f"There is no exit numbered {action.index + 1}.",
                    handled=False,
                )

        self.apply(action)
        return CommandResponse(self.describe_current_room())

    def describe_current_room(self) -> str:
        room = self.state.current_room()
        parts: List[str] = [room.description]
        if room.is_end:
            parts.append("You reached the end of the maze!")
            parts.append("Type 'restart' to play again.")
            return "\n".join(parts)
        if room.exits:
            parts.append("Exits:")
            parts.extend(
                f"  {number}. {exit_.label}"
                for number, exit_ in enumerate(room.exits, start=1)
            )
        else:
            parts.append("There is no way out. Type 'restart' to play again.")
        return "\n".join(parts)

    def describe_help(self) -> str:
        return "Commands: <exit number>, look, restart, help, quit."

    def view_state(self) -> Dict[str, object]:
        room = self.state.current_room()
        return {
            "room": {
                "id": room.id,
                "description": room.description,
                "is_end": room.is_end,
                "exits": [
                    {"index": index, "label": exit_.label}
                    for index, exit_ in enumerate(room.exits)
                ],
            },
            "is_finished": self.state.is_finished,
        }
