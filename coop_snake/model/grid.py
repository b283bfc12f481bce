"""Grid geometry for the cooperative snake simulation."""

from enum import Enum
from typing import Iterable, List, NamedTuple, Tuple

import numpy as np

BOARD_SIZE = 18


class Cell(NamedTuple):
    """Integer board coordinate. (x, y) for API, [y, x] for array indexing."""
    x: int
    y: int


class Direction(Enum):
    """Heading of a snake, valued by its unit (dx, dy) delta."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Order in which the planner enumerates moves; ties keep this order.
CANDIDATE_ORDER = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN)

ORIGIN = Cell(0, 0)


def in_bounds(cell: Cell) -> bool:
    """Check if cell lies on the walled board."""
    return 0 <= cell.x < BOARD_SIZE and 0 <= cell.y < BOARD_SIZE


def step(cell: Cell, direction: Direction) -> Cell:
    """
    Return the neighbouring cell in the given direction.

    The board is walled, not toroidal: the result is never clamped or
    wrapped, so callers check in_bounds() themselves.
    """
    dx, dy = direction.delta
    return Cell(cell.x + dx, cell.y + dy)


def distance(a: Cell, b: Cell) -> int:
    """Manhattan distance between two cells."""
    return abs(a.x - b.x) + abs(a.y - b.y)


def free_cells(occupied: Iterable[Cell]) -> List[Cell]:
    """
    List every board cell not in `occupied`, row by row (y, then x).

    Out-of-bounds entries in `occupied` are ignored.
    """
    mask = np.ones((BOARD_SIZE, BOARD_SIZE), dtype=bool)
    for x, y in occupied:
        if 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE:
            mask[y, x] = False
    ys, xs = np.nonzero(mask)
    return [Cell(int(x), int(y)) for x, y in zip(xs, ys)]
