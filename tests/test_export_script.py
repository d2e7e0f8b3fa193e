"""Tests for scripts/export_default_maze.py."""

import importlib.util
from pathlib import Path

import pytest

from mazegame import default_rooms, load_from_file

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "export_default_maze.py"


@pytest.fixture
def export_script():
    spec = importlib.util.spec_from_file_location("export_default_maze", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_writes_loadable_maze(export_script, tmp_path):
    output = tmp_path / "maze.json"

    assert export_script.main(["-o", str(output)]) == 0
    assert load_from_file(output).rooms == default_rooms()


def test_refuses_to_overwrite(export_script, tmp_path):
    output = tmp_path / "maze.json"
    output.write_text("keep me", encoding="utf-8")

    assert export_script.main(["-o", str(output)]) == 1
    assert output.read_text(encoding="utf-8") == "keep me"

    assert export_script.main(["-o", str(output), "--force"]) == 0
    assert load_from_file(output).current_room_id == "start"
