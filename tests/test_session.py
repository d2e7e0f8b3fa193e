"""Tests for the game session and its actions."""

import logging

import pytest

from mazegame import ChooseExit, GameSession, Restart, default_rooms, from_rooms, parse_action


class TestParseAction:
    @pytest.mark.parametrize("text", ["restart", "RESET", " new "])
    def test_restart_words(self, text):
        assert parse_action(text) == Restart()

    def test_numbers_are_one_based(self):
        assert parse_action("1") == ChooseExit(0)
        assert parse_action(" 3 ") == ChooseExit(2)

    @pytest.mark.parametrize("text", ["0", "-1", "go north", "", "1.5", "²"])
    def test_everything_else_is_none(self, text):
        assert parse_action(text) is None


class TestGameSession:
    """Tests for applying actions to the live state."""

    def test_defaults_to_builtin_maze(self):
        session = GameSession()
        assert session.state.current_room_id == "start"

    def test_apply_choose_exit(self):
        session = GameSession()
        session.apply(ChooseExit(0))
        assert session.state.current_room_id == "middle"

    def test_restart_replaces_state_with_default_maze(self, loop_rooms):
        session = GameSession(from_rooms(loop_rooms))
        session.apply(ChooseExit(0))
        old_state = session.state
        assert old_state.is_finished is True

        session.apply(Restart())

        assert session.state is not old_state
        assert session.state.rooms == default_rooms()
        assert session.state.current_room_id == "start"
        assert session.state.is_finished is False

    def test_unknown_action_type(self):
        with pytest.raises(TypeError):
            GameSession().apply("restart")

    def test_handle_command_moves(self):
        session = GameSession()
        response = session.handle_command("1")

        assert response.handled is True
        assert session.state.current_room_id == "middle"
        assert "1. Go back" in response.output
        assert "2. Go forward" in response.output

    def test_handle_command_out_of_range(self):
        session = GameSession()
        response = session.handle_command("4")

        assert response.handled is False
        assert "no exit numbered 4" in response.output
        assert session.state.current_room_id == "start"

    def test_handle_command_gibberish(self):
        session = GameSession()
        response = session.handle_command("dance")

        assert response.handled is False
        assert session.state.current_room_id == "start"

    def test_handle_command_superscript_digit(self):
        session = GameSession()
        response = session.handle_command("²")

        assert response.handled is False
        assert session.state.current_room_id == "start"

    def test_look_and_blank_describe_room(self):
        session = GameSession()
        description = session.describe_current_room()
        assert session.handle_command("").output == description
        assert session.handle_command("look").output == description

    def test_help(self):
        assert "restart" in GameSession().handle_command("help").output

    def test_end_room_description(self):
        session = GameSession()
        session.handle_command("1")
        output = session.handle_command("2").output

        assert "You reached the end of the maze!" in output
        assert "restart" in output

    def test_restart_command(self):
        session = GameSession()
        session.handle_command("1")
        session.handle_command("restart")
        assert session.state.current_room_id == "start"

    def test_view_state(self):
        session = GameSession()
        session.apply(ChooseExit(0))
        view = session.view_state()

        assert view["is_finished"] is False
        assert view["room"]["id"] == "middle"
        assert view["room"]["is_end"] is False
        assert view["room"]["exits"] == [
            {"index": 0, "label": "Go back"},
            {"index": 1, "label": "Go forward"},
        ]

    def test_apply_logs_state_snapshot(self, caplog):
        session = GameSession()
        with caplog.at_level(logging.DEBUG, logger="mazegame.engine"):
            session.apply(ChooseExit(0))

        assert "State after ChooseExit(index=0)" in caplog.text
        assert "'current_room': 'middle'" in caplog.text
