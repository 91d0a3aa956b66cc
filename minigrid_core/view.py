"""
Egocentric, partially observable view of the grid.

The agent sees a square window of agent_view_size cells extending ahead
of it. Rendering happens in four stages:

1. Sample the window from the grid (off-grid cells read as walls)
2. Rotate it so that the agent's facing direction always points up
3. Cast visibility from the agent's cell; occluded cells become empty
4. Write (type, color, state) triples into the caller's array

After rotation the agent sits at the bottom row, horizontal center.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from minigrid_core.errors import MiniGridError
from minigrid_core.grid import Grid
from minigrid_core.objects import ObjectType, WorldObj, make_empty, make_wall

Window = List[List[WorldObj]]


def view_origin(agent_pos: Tuple[int, int], agent_dir: int,
                view_size: int) -> Tuple[int, int]:
    """Grid coordinates of the top-left corner of the view window."""
    x, y = agent_pos
    half = view_size // 2
    if agent_dir == 0:    # east
        return x, y - half
    if agent_dir == 1:    # south
        return x - half, y
    if agent_dir == 2:    # west
        return x - view_size + 1, y - half
    if agent_dir == 3:    # north
        return x - half, y - view_size + 1
    raise MiniGridError(f"Invalid agent direction {agent_dir}")


def sample_window(grid: Grid, top_x: int, top_y: int, view_size: int) -> Window:
    """Copy the view_size x view_size block at (top_x, top_y), row by row."""
    window = []
    for i in range(view_size):
        row = []
        for j in range(view_size):
            x, y = top_x + j, top_y + i
            if grid.in_bounds(x, y):
                row.append(grid.cells[y][x].copy())
            else:
                row.append(make_wall())
        window.append(row)
    return window


def rotate_ccw(window: Window) -> Window:
    """One counter-clockwise quarter turn, into a fresh window."""
    n = len(window)
    rotated: Window = [[None] * n for _ in range(n)]
    for y in range(n):
        for x in range(n):
            rotated[n - 1 - x][y] = window[y][x]
    return rotated


def visibility_mask(window: Window, see_through_walls: bool = False) -> np.ndarray:
    """
    Boolean mask of the cells the agent can see in a rotated window.

    Visibility spreads out from the agent's cell one row at a time, first
    left-to-right then right-to-left. A visible, see-through cell marks its
    horizontal neighbour in the scan direction, the cell above it and the
    cell diagonally above in the scan direction. Opaque cells stay visible
    themselves but stop the spread.
    """
    n = len(window)
    if see_through_walls:
        return np.ones((n, n), dtype=bool)

    mask = np.zeros((n, n), dtype=bool)
    mask[n - 1, n // 2] = True

    for j in range(n - 1, -1, -1):
        # left -> right
        for i in range(0, n - 1):
            if not mask[j, i] or not window[j][i].can_see_behind():
                continue
            mask[j, i + 1] = True
            if j > 0:
                mask[j - 1, i + 1] = True
                mask[j - 1, i] = True

        # right -> left
        for i in range(n - 1, 0, -1):
            if not mask[j, i] or not window[j][i].can_see_behind():
                continue
            mask[j, i - 1] = True
            if j > 0:
                mask[j - 1, i - 1] = True
                mask[j - 1, i] = True

    return mask


def render_window(grid: Grid, agent_pos: Tuple[int, int], agent_dir: int,
                  carrying: Optional[WorldObj], view_size: int,
                  see_through_walls: bool = False) -> Tuple[Window, np.ndarray]:
    """
    The agent's rotated, occlusion-masked view and its visibility mask.

    Hidden cells are replaced by empty objects. The agent's own cell shows
    what it is carrying (or empty), never the cell it stands on.
    """
    top_x, top_y = view_origin(agent_pos, agent_dir, view_size)
    window = sample_window(grid, top_x, top_y, view_size)
    for _ in range(agent_dir + 1):
        window = rotate_ccw(window)

    mask = visibility_mask(window, see_through_walls)
    if not see_through_walls:
        for j in range(view_size):
            for i in range(view_size):
                if not mask[j, i]:
                    window[j][i] = make_empty()

    agent_x, agent_y = view_size // 2, view_size - 1
    if carrying is not None and carrying.type != ObjectType.EMPTY:
        window[agent_y][agent_x] = carrying.copy()
    else:
        window[agent_y][agent_x] = make_empty()
    return window, mask


def write_observation(window: Window, mask: np.ndarray, out: np.ndarray) -> None:
    """
    Write visible cells into out, indexed [x, y, channel].

    The window is stored [row][col]; out is transposed to (x, y) addressing.
    Hidden cells are zeroed (unseen) so a reused buffer never keeps stale
    content.
    """
    n = len(window)
    if out.shape != (n, n, 3):
        raise MiniGridError(f"Observation buffer has shape {out.shape}, expected {(n, n, 3)}")
    out.fill(0)
    for y in range(n):
        for x in range(n):
            if mask[y, x]:
                out[x, y, :] = window[y][x].encode()


def render_observation(grid: Grid, agent_pos: Tuple[int, int], agent_dir: int,
                       carrying: Optional[WorldObj], view_size: int,
                       see_through_walls: bool, out: np.ndarray) -> np.ndarray:
    """Render the agent's view into out and return it."""
    window, mask = render_window(
        grid, agent_pos, agent_dir, carrying, view_size, see_through_walls,
    )
    write_observation(window, mask, out)
    return out
