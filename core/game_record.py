"""Replay an SGF game record and report the stones left on the board.

The record is flattened into property events, which are applied one by one to
a :class:`~core.grid.Grid` and two stone lists.  After every single move the
dead stones of the mover and then of the opponent are removed.  The final
lists are sorted and shifted to 1-based coordinates.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from sgfmill import sgf_properties

from core.grid import Grid, Point, Stone
from core.liberty import remove_dead_stones
from input.sgf_parser import (
    EventKind,
    MalformedGameRecord,
    PropertyEvent,
    iter_events,
    single_value,
)

# sgfmill point letters only reach ``z``.
MAX_BOARD_SIZE = 26


@dataclass
class GameData:
    """Final board: size plus 1-based white and black stones."""

    size: int
    white_stones: List[Point] = field(default_factory=list)
    black_stones: List[Point] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "white_stones": [list(p) for p in self.white_stones],
            "black_stones": [list(p) for p in self.black_stones],
        }


def stone_key(point: Point, size: int) -> int:
    """Canonical ordering key ``x * size + y``."""
    return point.x * size + point.y


def sort_stones(stones: Iterable[Point], size: int) -> List[Point]:
    return sorted(stones, key=lambda p: stone_key(p, size))


def normalize(white_stones: Iterable[Point], black_stones: Iterable[Point], size: int) -> GameData:
    """Sort both stone lists and convert them to 1-based coordinates."""

    def shift(stones: Iterable[Point]) -> List[Point]:
        return [Point(p.x + 1, p.y + 1) for p in sort_stones(stones, size)]

    return GameData(size=size, white_stones=shift(white_stones), black_stones=shift(black_stones))


class BoardProjector:
    """Mutable board state fed with :class:`PropertyEvent` objects in order."""

    def __init__(self) -> None:
        self.size = 0
        self.grid: Optional[Grid] = None
        self.stones: Dict[Stone, List[Point]] = {Stone.WHITE: [], Stone.BLACK: []}

    @property
    def white_stones(self) -> List[Point]:
        return self.stones[Stone.WHITE]

    @property
    def black_stones(self) -> List[Point]:
        return self.stones[Stone.BLACK]

    # ------------------------------------------------------------------
    # Event handling
    # ------------------------------------------------------------------
    def apply(self, event: PropertyEvent) -> None:
        """Apply a single event to the board."""
        if event.kind is EventKind.SIZE:
            self._set_size(event)
        elif event.kind is EventKind.WHITE_MOVE:
            self._play(Stone.WHITE, event)
        elif event.kind is EventKind.BLACK_MOVE:
            self._play(Stone.BLACK, event)
        elif event.kind is EventKind.ADD_WHITE:
            self._add_stones(Stone.WHITE, event)
        elif event.kind is EventKind.ADD_BLACK:
            self._add_stones(Stone.BLACK, event)

    def _set_size(self, event: PropertyEvent) -> None:
        raw = single_value(event)
        try:
            size = sgf_properties.interpret_number(raw or b"")
        except ValueError as exc:
            raise MalformedGameRecord("bad board size %r" % raw) from exc
        if not 0 < size <= MAX_BOARD_SIZE:
            raise MalformedGameRecord("unsupported board size %d" % size)
        if self.white_stones or self.black_stones:
            if size != self.size:
                raise MalformedGameRecord(
                    "board size %d conflicts with %d after stones were placed" % (size, self.size)
                )
            logging.debug("Repeated board size %d ignored", size)
            return
        self.size = size
        self.grid = Grid(size)

    def _require_grid(self, event: PropertyEvent) -> Grid:
        if self.grid is None:
            raise MalformedGameRecord("%s before any board size declaration" % event.identifier)
        return self.grid

    def _place(self, colour: Stone, point: Point) -> None:
        holder = self.grid.get(point)
        if holder is not Stone.EMPTY:
            # Sibling variations may revisit a point; the later stone replaces it.
            self.stones[holder].remove(point)
        self.stones[colour].append(point)
        self.grid.set(point, colour)

    def _play(self, colour: Stone, event: PropertyEvent) -> None:
        grid = self._require_grid(event)
        raw = single_value(event) or b""
        try:
            move = sgf_properties.interpret_go_point(raw, self.size)
        except ValueError as exc:
            raise MalformedGameRecord("bad move %s" % event) from exc
        if move is None:
            return
        row, col = move
        # sgfmill counts rows from the bottom edge.
        self._place(colour, Point(col, self.size - 1 - row))
        remove_dead_stones(grid, self.stones[colour])
        remove_dead_stones(grid, self.stones[colour.opponent()])

    def _add_stones(self, colour: Stone, event: PropertyEvent) -> None:
        self._require_grid(event)
        context = sgf_properties.Presenter(self.size, "UTF-8")
        try:
            coords = sgf_properties.interpret_point_list(event.values, context)
        except ValueError as exc:
            raise MalformedGameRecord("bad setup %s" % event) from exc
        points = [Point(col, self.size - 1 - row) for row, col in coords]
        for point in sort_stones(points, self.size):
            self._place(colour, point)

    # ------------------------------------------------------------------
    def result(self) -> GameData:
        return normalize(self.white_stones, self.black_stones, self.size)


def get_game_data(raw_sgf: Union[str, bytes]) -> GameData:
    """Interpret ``raw_sgf`` and return the stones remaining at the end."""
    projector = BoardProjector()
    for event in iter_events(raw_sgf):
        projector.apply(event)
    if projector.grid is None:
        raise MalformedGameRecord("no board size declared")
    return projector.result()


__all__ = [
    "BoardProjector",
    "GameData",
    "MAX_BOARD_SIZE",
    "get_game_data",
    "normalize",
    "sort_stones",
    "stone_key",
]
