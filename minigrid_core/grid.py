"""
The grid: a fixed-size 2D array of world objects.

Coordinates follow the screen convention:

    0 -------------> x (width)
    |
    |    cells[y][x] -> (x, y)
    |
    v
    y (height)

Storage is row-major by y. Every public accessor takes (x, y).
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from minigrid_core.errors import MiniGridError
from minigrid_core.objects import ObjectType, WorldObj, make_empty


class Grid:
    """A height x width array of WorldObj values."""

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells: List[List[WorldObj]] = [
            [make_empty() for _ in range(width)] for _ in range(height)
        ]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise MiniGridError(
                f"Cell ({x}, {y}) is outside the {self.width}x{self.height} grid"
            )

    def get(self, x: int, y: int) -> WorldObj:
        self._check(x, y)
        return self.cells[y][x]

    def set(self, x: int, y: int, obj: Optional[WorldObj]) -> None:
        """Store obj at (x, y). None clears the cell."""
        self._check(x, y)
        self.cells[y][x] = obj if obj is not None else make_empty()

    # --- Drawing helpers used by level generators ---

    def horz_wall(self, x: int, y: int, length: Optional[int] = None,
                  obj_type: ObjectType = ObjectType.WALL) -> None:
        if length is None:
            length = self.width - x
        for i in range(length):
            self.set(x + i, y, WorldObj(obj_type))

    def vert_wall(self, x: int, y: int, length: Optional[int] = None,
                  obj_type: ObjectType = ObjectType.WALL) -> None:
        if length is None:
            length = self.height - y
        for j in range(length):
            self.set(x, y + j, WorldObj(obj_type))

    def wall_rect(self, x: int, y: int, w: int, h: int) -> None:
        """Outline a w x h rectangle whose top-left corner is (x, y)."""
        self.horz_wall(x, y, w)
        self.horz_wall(x, y + h - 1, w)
        self.vert_wall(x, y, h)
        self.vert_wall(x + w - 1, y, h)

    def copy(self) -> "Grid":
        clone = Grid(self.width, self.height)
        clone.cells = [[obj.copy() for obj in row] for row in self.cells]
        return clone

    def encode(self) -> np.ndarray:
        """
        Encode the whole grid as a (width, height, 3) uint8 array.

        Indexed [x, y, channel], the same layout the agent's observation
        uses, so a fully observed grid compares directly against it.
        """
        array = np.zeros((self.width, self.height, 3), dtype=np.uint8)
        for y in range(self.height):
            for x in range(self.width):
                array[x, y, :] = self.cells[y][x].encode()
        return array

    def count(self, obj_type: ObjectType) -> int:
        return sum(obj.type == obj_type for row in self.cells for obj in row)

    def render(self) -> str:
        """ASCII rendering of the grid for debugging."""
        lines = []
        for row in self.cells:
            lines.append("".join(_SYMBOLS.get(obj.type, "?") for obj in row))
        return "\n".join(lines)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.cells == other.cells


_SYMBOLS = {
    ObjectType.UNSEEN: " ",
    ObjectType.EMPTY: ".",
    ObjectType.WALL: "#",
    ObjectType.FLOOR: "_",
    ObjectType.DOOR: "D",
    ObjectType.KEY: "K",
    ObjectType.BALL: "O",
    ObjectType.BOX: "B",
    ObjectType.GOAL: "G",
    ObjectType.LAVA: "~",
}


def walled_grid(width: int, height: int) -> Grid:
    """A grid whose outer border is wall and whose interior is empty."""
    grid = Grid(width, height)
    grid.wall_rect(0, 0, width, height)
    return grid


def grid_from_text(lines) -> Grid:
    """
    Inverse of Grid.render(): build a grid from rows of symbols.

    Objects get their default color; doors are closed and unlocked.
    """
    lines = [line for line in lines if line]
    if not lines:
        raise ValueError("Layout has no rows")
    width = len(lines[0])
    if any(len(line) != width for line in lines):
        raise ValueError("Layout rows must all have the same length")

    grid = Grid(width, len(lines))
    for y, line in enumerate(lines):
        for x, symbol in enumerate(line):
            if symbol not in _TYPES:
                raise ValueError(f"Unknown layout symbol {symbol!r} at ({x}, {y})")
            grid.cells[y][x] = WorldObj(_TYPES[symbol])
    return grid


_TYPES = {symbol: obj_type for obj_type, symbol in _SYMBOLS.items()
          if obj_type != ObjectType.UNSEEN}
