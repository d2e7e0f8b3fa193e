"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest

from mazegame import Exit, Room


@pytest.fixture
def write_maze(tmp_path):
    """Write a maze payload (dict, or raw text) to a temp file and return its path."""

    def _write(payload, name: str = "maze.json") -> Path:
        path = tmp_path / name
        if isinstance(payload, (str, bytes)):
            data = payload.encode("utf-8") if isinstance(payload, str) else payload
            path.write_bytes(data)
        else:
            path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def loop_rooms():
    """Two rooms where the end room still has an exit back out."""
    return [
        Room(id="hall", description="A hall.", exits=[Exit("North", "exit")]),
        Room(id="exit", description="Daylight.", exits=[Exit("Back inside", "hall")], is_end=True),
    ]
