"""Unit tests for the engine backed game modes (core/game_modes.py)."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from api.gtp_interface import GTPController, GTPError
from core.game_modes import AtariGame, MachineGame, MoveResult
from core.grid import Point, Stone


@pytest.fixture
def controller() -> MagicMock:
    """Engine controller mock accepting every move and capturing nothing."""
    ctrl = MagicMock(spec=GTPController)
    ctrl.play.return_value = True
    ctrl.captures.return_value = 0
    ctrl.undo.return_value = True
    ctrl.genmove.return_value = Point(5, 5)
    return ctrl


class TestAtariGame:
    """Tests for the first-capture-wins mode."""

    def test_start_sets_up_engine(self, controller):
        game = AtariGame(controller)
        game.start()
        controller.set_board_size.assert_called_once_with(9)
        controller.clear_board.assert_called_once_with()
        assert game.current_turn is Stone.BLACK
        assert not game.finished

    def test_turns_alternate(self, controller):
        game = AtariGame(controller)
        game.start()
        assert game.play(Point(2, 2)) is MoveResult.PLAYED
        controller.play.assert_called_with("black", Point(3, 3))
        assert game.current_turn is Stone.WHITE
        assert game.play(Point(4, 4)) is MoveResult.PLAYED
        controller.play.assert_called_with("white", Point(5, 5))
        assert game.current_turn is Stone.BLACK

    def test_rejected_move_keeps_turn(self, controller):
        controller.play.return_value = False
        game = AtariGame(controller)
        game.start()
        assert game.play(Point(0, 0)) is MoveResult.REJECTED
        assert game.current_turn is Stone.BLACK
        controller.captures.assert_not_called()

    @pytest.mark.parametrize("point", [Point(9, 0), Point(0, 9), Point(-1, 3)])
    def test_off_board_point_not_sent(self, controller, point):
        game = AtariGame(controller)
        game.start()
        assert game.play(point) is MoveResult.REJECTED
        controller.play.assert_not_called()

    def test_first_capture_wins(self, controller):
        game = AtariGame(controller)
        game.start()
        game.play(Point(0, 0))
        controller.captures.return_value = 1
        assert game.play(Point(1, 1)) is MoveResult.WON
        controller.captures.assert_called_with("white")
        assert game.winner is Stone.WHITE
        assert game.finished

    def test_no_moves_after_win(self, controller):
        controller.captures.return_value = 1
        game = AtariGame(controller)
        game.start()
        game.play(Point(0, 0))
        controller.play.reset_mock()
        assert game.play(Point(3, 3)) is MoveResult.REJECTED
        controller.play.assert_not_called()

    def test_undo_flips_turn(self, controller):
        game = AtariGame(controller)
        game.start()
        game.play(Point(0, 0))
        assert game.undo() is True
        assert game.current_turn is Stone.BLACK

    def test_undo_reopens_won_game(self, controller):
        controller.captures.return_value = 1
        game = AtariGame(controller)
        game.start()
        game.play(Point(0, 0))
        assert game.undo() is True
        assert not game.finished
        assert game.current_turn is Stone.BLACK

    def test_failed_undo_keeps_state(self, controller):
        game = AtariGame(controller)
        game.start()
        game.play(Point(0, 0))
        controller.undo.return_value = False
        assert game.undo() is False
        assert game.current_turn is Stone.WHITE

    def test_restart_clears_winner(self, controller):
        controller.captures.return_value = 1
        game = AtariGame(controller)
        game.start()
        game.play(Point(0, 0))
        game.start()
        assert game.winner is None
        assert game.current_turn is Stone.BLACK

    def test_stones(self, controller):
        controller.list_stones.side_effect = [[Point(1, 1)], [Point(2, 2)]]
        game = AtariGame(controller)
        assert game.stones() == ([Point(1, 1)], [Point(2, 2)])
        assert [c.args for c in controller.list_stones.call_args_list] == [("white",), ("black",)]


class TestMachineGame:
    """Tests for the human against engine mode."""

    def test_start_machine_opens(self, controller):
        game = MachineGame(controller)
        assert game.start() == Point(5, 5)
        controller.set_board_size.assert_called_once_with(9)
        controller.clear_board.assert_called_once_with()
        controller.genmove.assert_called_once_with("black")
        assert game.human_turn

    def test_human_move_then_machine_reply(self, controller):
        game = MachineGame(controller)
        game.start()
        controller.genmove.return_value = Point(3, 7)
        result, reply = game.play(Point(2, 2))
        assert result is MoveResult.PLAYED
        assert reply == Point(3, 7)
        controller.play.assert_called_once_with("white", Point(3, 3))
        assert game.last_machine_move == Point(3, 7)
        assert game.human_turn

    def test_rejected_human_move(self, controller):
        game = MachineGame(controller)
        game.start()
        controller.play.return_value = False
        controller.genmove.reset_mock()
        assert game.play(Point(2, 2)) == (MoveResult.REJECTED, None)
        controller.genmove.assert_not_called()

    def test_moves_ignored_before_start(self, controller):
        game = MachineGame(controller)
        assert game.play(Point(2, 2)) == (MoveResult.REJECTED, None)
        controller.play.assert_not_called()

    def test_machine_plays_white(self, controller):
        game = MachineGame(controller, board_size=13, machine_colour=Stone.WHITE)
        game.start()
        controller.set_board_size.assert_called_once_with(13)
        controller.genmove.assert_called_with("white")
        game.play(Point(12, 12))
        controller.play.assert_called_once_with("black", Point(13, 13))

    def test_engine_failure_hands_turn_back(self, controller):
        game = MachineGame(controller)
        game.start()
        controller.genmove.side_effect = [GTPError("engine closed"), Point(4, 4)]
        with pytest.raises(GTPError):
            game.play(Point(2, 2))
        assert game.human_turn
        assert game.play(Point(6, 6)) == (MoveResult.PLAYED, Point(4, 4))
