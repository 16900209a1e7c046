"""Game modes played against a GTP engine.

Both modes keep their own turn state and talk to the engine only through a
:class:`~api.gtp_interface.GTPController`.  Points passed in are 0-based board
positions; the engine sees them as 1-based vertices.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Tuple

from api.gtp_interface import GTPController
from core.grid import Point, Stone

DEFAULT_BOARD_SIZE = 9

COLOUR_NAMES = {Stone.BLACK: "black", Stone.WHITE: "white"}


class MoveResult(Enum):
    REJECTED = "rejected"
    PLAYED = "played"
    WON = "won"


def _to_vertex(point: Point) -> Point:
    return Point(point.x + 1, point.y + 1)


def _on_board(point: Point, board_size: int) -> bool:
    return 0 <= point.x < board_size and 0 <= point.y < board_size


class AtariGame:
    """First capture wins. Black moves first."""

    def __init__(self, controller: GTPController, board_size: int = DEFAULT_BOARD_SIZE) -> None:
        self.controller = controller
        self.board_size = board_size
        self.current_turn = Stone.BLACK
        self.winner: Optional[Stone] = None

    @property
    def finished(self) -> bool:
        return self.winner is not None

    def start(self) -> None:
        """Set up a fresh board on the engine."""
        self.controller.set_board_size(self.board_size)
        self.controller.clear_board()
        self.current_turn = Stone.BLACK
        self.winner = None
        logging.info("Set turn %s", COLOUR_NAMES[self.current_turn])

    def play(self, point: Point) -> MoveResult:
        """Play ``point`` for the side to move."""
        if self.finished:
            logging.info("Game already won by %s", COLOUR_NAMES[self.winner])
            return MoveResult.REJECTED
        if not _on_board(point, self.board_size):
            logging.info("Bad point %s", tuple(point))
            return MoveResult.REJECTED
        colour = COLOUR_NAMES[self.current_turn]
        if not self.controller.play(colour, _to_vertex(point)):
            logging.info("Bad %s move", colour)
            return MoveResult.REJECTED
        if self.controller.captures(colour) > 0:
            logging.info("%s win", colour.capitalize())
            self.winner = self.current_turn
            return MoveResult.WON
        self.current_turn = self.current_turn.opponent()
        logging.info("Set turn %s", COLOUR_NAMES[self.current_turn])
        return MoveResult.PLAYED

    def undo(self) -> bool:
        """Take back the last move. Returns ``True`` if the engine accepted."""
        if not self.controller.undo():
            return False
        if self.winner is not None:
            # The winning move is the one taken back; its player moves again.
            self.winner = None
        else:
            self.current_turn = self.current_turn.opponent()
        logging.info("Set turn %s", COLOUR_NAMES[self.current_turn])
        return True

    def stones(self) -> Tuple[List[Point], List[Point]]:
        """Return ``(white, black)`` 1-based stones as reported by the engine."""
        return self.controller.list_stones("white"), self.controller.list_stones("black")


class MachineGame:
    """Human against the engine. The machine opens."""

    def __init__(
        self,
        controller: GTPController,
        board_size: int = DEFAULT_BOARD_SIZE,
        machine_colour: Stone = Stone.BLACK,
    ) -> None:
        self.controller = controller
        self.board_size = board_size
        self.machine_colour = machine_colour
        self.human_colour = machine_colour.opponent()
        self.human_turn = False
        self.last_machine_move: Optional[Point] = None

    def start(self) -> Optional[Point]:
        """Set up the board and let the machine play its first move."""
        self.controller.set_board_size(self.board_size)
        self.controller.clear_board()
        self.human_turn = False
        move = self._machine_move()
        self.human_turn = True
        return move

    def _machine_move(self) -> Optional[Point]:
        logging.info("waiting for machine response")
        self.last_machine_move = self.controller.genmove(COLOUR_NAMES[self.machine_colour])
        logging.info("machine: %s", self.last_machine_move)
        return self.last_machine_move

    def play(self, point: Point) -> Tuple[MoveResult, Optional[Point]]:
        """Play the human move and return the machine's reply."""
        if not self.human_turn:
            logging.info("Ignoring move, as machine turn")
            return MoveResult.REJECTED, None
        if not _on_board(point, self.board_size):
            logging.info("Bad point %s", tuple(point))
            return MoveResult.REJECTED, None
        if not self.controller.play(COLOUR_NAMES[self.human_colour], _to_vertex(point)):
            logging.info("Bad human move")
            return MoveResult.REJECTED, None
        self.human_turn = False
        try:
            reply = self._machine_move()
        finally:
            # The human may retry after an engine failure.
            self.human_turn = True
        return MoveResult.PLAYED, reply

    def stones(self) -> Tuple[List[Point], List[Point]]:
        return self.controller.list_stones("white"), self.controller.list_stones("black")


__all__ = ["AtariGame", "DEFAULT_BOARD_SIZE", "MachineGame", "MoveResult"]
