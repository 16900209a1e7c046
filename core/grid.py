"""Board grid used while replaying a game record."""
from __future__ import annotations

from enum import IntEnum
from typing import List, NamedTuple


class Stone(IntEnum):
    """Cell state, using the same encoding as board matrices (0/1/-1)."""

    EMPTY = 0
    BLACK = 1
    WHITE = -1

    def opponent(self) -> "Stone":
        """Return the other colour. ``EMPTY`` has no opponent."""
        if self is Stone.EMPTY:
            raise ValueError("empty cell has no opponent")
        return Stone.WHITE if self is Stone.BLACK else Stone.BLACK


class Point(NamedTuple):
    """A board coordinate, ``x`` is the column and ``y`` the row."""

    x: int
    y: int


Board = List[List[int]]


class Grid:
    """Square board stored as a single row-major list of :class:`Stone`."""

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("grid size must be positive, got %d" % size)
        self.size = size
        self.cells: List[Stone] = [Stone.EMPTY] * (size * size)

    def contains(self, point: Point) -> bool:
        """Return ``True`` if ``point`` lies on the board."""
        return 0 <= point.x < self.size and 0 <= point.y < self.size

    def _index(self, point: Point) -> int:
        if not self.contains(point):
            raise IndexError("point %r outside %dx%d grid" % (tuple(point), self.size, self.size))
        return point.y * self.size + point.x

    def get(self, point: Point) -> Stone:
        return self.cells[self._index(point)]

    def set(self, point: Point, stone: Stone) -> None:
        self.cells[self._index(point)] = stone

    def clear(self, point: Point) -> None:
        self.set(point, Stone.EMPTY)

    def to_matrix(self) -> Board:
        """Return the grid as a list of rows of ints (``board[y][x]``)."""
        return [
            [int(self.cells[y * self.size + x]) for x in range(self.size)]
            for y in range(self.size)
        ]


__all__ = ["Board", "Grid", "Point", "Stone"]
