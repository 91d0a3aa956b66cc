"""
Pre-built levels of increasing complexity.

Each level only implements gen_grid(); the rules come from MiniGridEnv.

1. EmptyEnv: walled room, goal in the far corner
2. DoorKeyEnv: the room is split by a wall with a locked door; the key
   lies on the agent's side
3. LayoutEnv: a fixed map drawn as text, for hand-made scenarios
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from minigrid_core.grid import grid_from_text, walled_grid
from minigrid_core.objects import Color, WorldObj, make_door, make_goal, make_key
from minigrid_core.worlds.minigrid_env import EnvConfig, MiniGridEnv, RANDOM_DIR


class EmptyEnv(MiniGridEnv):
    """
    Empty room; the agent must reach the green goal square.

        # # # # #
        # > . . #
        # . . . #
        # . . G #
        # # # # #

    With agent_start_pos=None the agent is placed at a random free cell.
    """

    def __init__(self, config: EnvConfig, rng: np.random.Generator,
                 agent_start_pos: Optional[Tuple[int, int]] = (1, 1)):
        super().__init__(config, rng)
        self.agent_start_pos = agent_start_pos

    def gen_grid(self) -> None:
        self.grid = walled_grid(self.width, self.height)
        self.grid.set(self.width - 2, self.height - 2, make_goal())

        if self.agent_start_pos is not None:
            self.agent_pos = self.agent_start_pos
            if self.agent_start_dir == RANDOM_DIR:
                self.agent_dir = int(self.rng.integers(0, 4))
            else:
                self.agent_dir = self.agent_start_dir
        else:
            self.place_agent()


class DoorKeyEnv(MiniGridEnv):
    """
    A yellow locked door splits the room; pick up the key, open the door,
    reach the goal.

        # # # # # #
        # . . # . #
        # > K D . #
        # . . # . #
        # . . # G #
        # # # # # #

    Needs at least 5x5: a column on each side of the dividing wall, and
    two free cells left of it for the agent and the key.
    """

    MIN_SIZE = 5

    def __init__(self, config: EnvConfig, rng: np.random.Generator):
        if config.width < self.MIN_SIZE or config.height < self.MIN_SIZE:
            raise ValueError(
                f"DoorKeyEnv needs at least a {self.MIN_SIZE}x{self.MIN_SIZE} grid, "
                f"got {config.width}x{config.height}"
            )
        super().__init__(config, rng)

    def gen_grid(self) -> None:
        width, height = self.width, self.height
        self.grid = walled_grid(width, height)
        self.grid.set(width - 2, height - 2, make_goal())

        split_x = int(self.rng.integers(2, width - 2))
        self.grid.vert_wall(split_x, 0)

        # Agent on the left side of the wall
        self.place_agent(0, 0, split_x - 1, height - 1)

        door_y = int(self.rng.integers(1, height - 2))
        self.grid.set(split_x, door_y, make_door(Color.YELLOW, is_locked=True))

        self.place_object(0, 0, split_x - 1, height - 1, make_key(Color.YELLOW))


def make_empty(size: int = 5, max_steps: Optional[int] = None,
               rng: Optional[np.random.Generator] = None, **kwargs) -> EmptyEnv:
    """Empty size x size room. max_steps defaults to 4 * size^2."""
    config = EnvConfig(
        width=size, height=size,
        max_steps=max_steps or 4 * size * size,
        **kwargs,
    )
    return EmptyEnv(config, rng if rng is not None else np.random.default_rng())


def make_door_key(size: int = 5, max_steps: Optional[int] = None,
                  rng: Optional[np.random.Generator] = None,
                  **kwargs) -> DoorKeyEnv:
    """Door-key room. max_steps defaults to 10 * size^2."""
    config = EnvConfig(
        width=size, height=size,
        max_steps=max_steps or 10 * size * size,
        **kwargs,
    )
    return DoorKeyEnv(config, rng if rng is not None else np.random.default_rng())


_ARROWS = {">": 0, "v": 1, "<": 2, "^": 3}


class LayoutEnv(MiniGridEnv):
    """
    A fixed level drawn as text, using the symbols of Grid.render().

    The agent is one of > v < ^ and stands on an empty cell. Objects that
    need a color or state (doors, keys, boxes) are passed separately as
    {(x, y): WorldObj}; each reset places fresh copies of them.

        env = LayoutEnv(config, rng, [
            "#####",
            "#>..#",
            "#...#",
            "#..G#",
            "#####",
        ])
    """

    def __init__(self, config: EnvConfig, rng: np.random.Generator,
                 layout: Sequence[str],
                 objects: Optional[Dict[Tuple[int, int], WorldObj]] = None):
        super().__init__(config, rng)
        self.layout: List[str] = list(layout)
        self.objects = dict(objects or {})
        if len(self.layout) != self.height or any(
                len(row) != self.width for row in self.layout):
            raise ValueError(
                f"Layout does not match the configured {self.width}x{self.height} grid"
            )

    def gen_grid(self) -> None:
        rows = []
        for y, row in enumerate(self.layout):
            for x, symbol in enumerate(row):
                if symbol in _ARROWS:
                    self.agent_pos = (x, y)
                    self.agent_dir = _ARROWS[symbol]
            rows.append("".join("." if s in _ARROWS else s for s in row))
        self.grid = grid_from_text(rows)
        for (x, y), obj in self.objects.items():
            self.grid.set(x, y, obj.copy())


def make_layout(layout: Sequence[str], max_steps: int = 100,
                objects: Optional[Dict[Tuple[int, int], WorldObj]] = None,
                rng: Optional[np.random.Generator] = None,
                **kwargs) -> LayoutEnv:
    """LayoutEnv sized to its layout."""
    config = EnvConfig(
        width=len(layout[0]), height=len(layout),
        max_steps=max_steps,
        **kwargs,
    )
    return LayoutEnv(config, rng if rng is not None else np.random.default_rng(),
                     layout, objects)
