"""Dead stone detection for replayed game records.

A stone is *safe* when one of its orthogonal neighbours is empty, or when it
touches a stone of the same list that is already safe.  Safety spreads until a
full sweep adds nothing; whatever is left over has no path to a liberty and is
dead.
"""
from __future__ import annotations

import logging
from typing import Iterator, List, Sequence, Set, Tuple

from core.grid import Grid, Point, Stone


def neighbors(x: int, y: int, size: int) -> Iterator[Tuple[int, int]]:
    """Yield the coordinates adjacent to ``(x, y)`` on a ``size`` x ``size`` board."""
    if x > 0:
        yield x - 1, y
    if x < size - 1:
        yield x + 1, y
    if y > 0:
        yield x, y - 1
    if y < size - 1:
        yield x, y + 1


def find_dead_stones(grid: Grid, stones: Sequence[Point]) -> List[Point]:
    """Return the stones of ``stones`` that cannot reach an empty point.

    ``stones`` is the full list for one colour.  Connectivity is only followed
    through stones of that list, so opposing stones block just like the edge.
    The returned stones keep their order from ``stones``.
    """
    safe: Set[Point] = set()
    while True:
        added = False
        for stone in stones:
            if stone in safe:
                continue
            for nx, ny in neighbors(stone.x, stone.y, grid.size):
                neighbour = Point(nx, ny)
                if grid.get(neighbour) is Stone.EMPTY or neighbour in safe:
                    safe.add(stone)
                    added = True
                    break
        if not added:
            break
    return [stone for stone in stones if stone not in safe]


def remove_dead_stones(grid: Grid, stones: List[Point]) -> List[Point]:
    """Drop dead stones from ``stones`` and ``grid`` in place.

    Returns the removed stones.
    """
    dead = find_dead_stones(grid, stones)
    if not dead:
        return dead
    dead_set = set(dead)
    stones[:] = [stone for stone in stones if stone not in dead_set]
    for stone in dead:
        grid.clear(stone)
    logging.debug("Removed dead stones: %s", [tuple(s) for s in dead])
    return dead


__all__ = ["find_dead_stones", "neighbors", "remove_dead_stones"]
