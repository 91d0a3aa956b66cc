"""
The MiniGrid environment core: actions, placement and observation.

A MiniGridEnv holds one agent in one grid. Subclasses provide gen_grid(),
which lays out the level and positions the agent. Everything else lives
here: the action rules, reward and truncation, random placement, and the
egocentric view.

Directions are encoded as:
    0 = east (+x), 1 = south (+y), 2 = west (-x), 3 = north (-y)

The random number generator is injected and never seeded here: the
runner that owns the environment decides how seeds are managed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np

from minigrid_core import view
from minigrid_core.errors import MiniGridError
from minigrid_core.grid import Grid
from minigrid_core.objects import ObjectType, WorldObj, make_empty

logger = logging.getLogger(__name__)

RANDOM_DIR = -1

DIR_TO_VEC = (
    (1, 0),    # east
    (0, 1),    # south
    (-1, 0),   # west
    (0, -1),   # north
)


# ---------------------------------------------------------------------------
# Actions and configuration
# ---------------------------------------------------------------------------

class Action(IntEnum):
    """The discrete action space."""
    LEFT = 0
    RIGHT = 1
    FORWARD = 2
    PICKUP = 3
    DROP = 4
    TOGGLE = 5
    DONE = 6

    @staticmethod
    def all() -> List["Action"]:
        return list(Action)


@dataclass
class EnvConfig:
    """Configuration shared by every MiniGrid level."""
    width: int = 8
    height: int = 8
    max_steps: int = 100
    agent_view_size: int = 7           # Odd, so the agent is centered
    see_through_walls: bool = False
    agent_start_dir: int = RANDOM_DIR  # -1 = random, else 0..3

    def validate(self) -> "EnvConfig":
        if self.width < 3 or self.height < 3:
            raise ValueError(
                f"Grid must be at least 3x3, got {self.width}x{self.height}"
            )
        if self.max_steps <= 0:
            raise ValueError(f"max_steps must be positive, got {self.max_steps}")
        if self.agent_view_size < 3 or self.agent_view_size % 2 == 0:
            raise ValueError(
                f"agent_view_size must be odd and >= 3, got {self.agent_view_size}"
            )
        if self.agent_start_dir not in (RANDOM_DIR, 0, 1, 2, 3):
            raise ValueError(
                f"agent_start_dir must be -1 or 0..3, got {self.agent_start_dir}"
            )
        return self


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

class MiniGridEnv:
    """
    Single-agent grid world with an egocentric partial view.

    Lifecycle:
        env.reset()                   # gen_grid() + episode counters
        reward = env.step(action)     # once per time step
        env.render_observation(obs)   # into a caller-owned array

    Stepping an episode that is already done is the caller's mistake and
    is not checked.
    """

    def __init__(self, config: EnvConfig, rng: np.random.Generator):
        self.config = config.validate()
        self.rng = rng
        self.width = config.width
        self.height = config.height
        self.max_steps = config.max_steps
        self.agent_view_size = config.agent_view_size
        self.see_through_walls = config.see_through_walls
        self.agent_start_dir = config.agent_start_dir

        self.grid = Grid(self.width, self.height)
        self.agent_pos: Tuple[int, int] = (-1, -1)
        self.agent_dir: int = (
            config.agent_start_dir if config.agent_start_dir != RANDOM_DIR else 0
        )
        self.carrying: WorldObj = make_empty()
        self.step_count = 0
        self.done = False

    # --- Level generation ---

    def gen_grid(self) -> None:
        """Build self.grid and set agent_pos / agent_dir. Subclass hook."""
        raise NotImplementedError

    def reset(self) -> None:
        """Generate a fresh level and start a new episode."""
        self.grid = Grid(self.width, self.height)
        self.gen_grid()
        self.step_count = 0
        self.done = False

        x, y = self.agent_pos
        if not self.grid.in_bounds(x, y):
            raise MiniGridError(f"Level left the agent off the grid at {self.agent_pos}")
        if self.agent_dir not in (0, 1, 2, 3):
            raise MiniGridError(f"Level set invalid agent direction {self.agent_dir}")
        if not self.grid.get(x, y).can_overlap():
            raise MiniGridError(
                f"Agent starts on a cell it cannot occupy: {self.grid.get(x, y)!r}"
            )
        self.carrying = make_empty()
        logger.debug("Reset %s: agent at %s facing %d",
                     type(self).__name__, self.agent_pos, self.agent_dir)

    # --- Dynamics ---

    @property
    def dir_vec(self) -> Tuple[int, int]:
        if self.agent_dir not in (0, 1, 2, 3):
            raise MiniGridError(f"Invalid agent direction {self.agent_dir}")
        return DIR_TO_VEC[self.agent_dir]

    @property
    def front_pos(self) -> Tuple[int, int]:
        """The cell directly in front of the agent."""
        dx, dy = self.dir_vec
        return self.agent_pos[0] + dx, self.agent_pos[1] + dy

    def step(self, action: int) -> float:
        """
        Apply one action and return its reward.

        Only reaching the goal pays: 1 - 0.9 * (step_count / max_steps).
        Lava ends the episode with no reward. Running out of steps ends it
        whatever the action did.

        action is an Action or a plain integer code; floats and bools are
        rejected.
        """
        if isinstance(action, bool) or not isinstance(action, (int, np.integer)):
            raise MiniGridError(f"Action must be an integer code, got {action!r}")
        self.step_count += 1
        reward = 0.0

        fwd_x, fwd_y = self.front_pos
        if not self.grid.in_bounds(fwd_x, fwd_y):
            raise MiniGridError(
                f"Cell in front of the agent ({fwd_x}, {fwd_y}) is off the grid; "
                "levels must be enclosed by walls"
            )
        fwd_cell = self.grid.get(fwd_x, fwd_y)

        if action == Action.LEFT:
            self.agent_dir = (self.agent_dir - 1) % 4

        elif action == Action.RIGHT:
            self.agent_dir = (self.agent_dir + 1) % 4

        elif action == Action.FORWARD:
            if fwd_cell.can_overlap():
                self.agent_pos = (fwd_x, fwd_y)
            if fwd_cell.type == ObjectType.GOAL:
                self.done = True
                reward = 1 - 0.9 * (self.step_count / self.max_steps)
                logger.debug("Goal reached at step %d, reward %.3f",
                             self.step_count, reward)
            elif fwd_cell.type == ObjectType.LAVA:
                self.done = True
                logger.debug("Stepped into lava at step %d", self.step_count)

        elif action == Action.PICKUP:
            if self.carrying.type == ObjectType.EMPTY and fwd_cell.can_pickup():
                self.carrying = fwd_cell
                self.grid.set(fwd_x, fwd_y, make_empty())

        elif action == Action.DROP:
            if (self.carrying.type != ObjectType.EMPTY
                    and fwd_cell.type == ObjectType.EMPTY):
                self.grid.set(fwd_x, fwd_y, self.carrying)
                self.carrying = make_empty()

        elif action == Action.TOGGLE:
            self._toggle(fwd_x, fwd_y, fwd_cell)

        elif action != Action.DONE:
            raise MiniGridError(f"Unknown action {action!r}")

        if self.step_count >= self.max_steps:
            if not self.done:
                logger.debug("Episode truncated after %d steps", self.step_count)
            self.done = True

        return reward

    def _toggle(self, x: int, y: int, obj: WorldObj) -> None:
        if obj.type == ObjectType.DOOR:
            if obj.is_locked:
                # The door stays flagged locked; being open is what lets the
                # agent through.
                if (self.carrying.type == ObjectType.KEY
                        and self.carrying.color == obj.color):
                    obj.is_open = True
            else:
                obj.is_open = not obj.is_open

        elif obj.type == ObjectType.BOX:
            # The contents replace the box, keeping whatever they hold.
            self.grid.set(x, y, obj.contains)
            obj.contains = None

    # --- Placement ---

    def place_object(self, start_x: int, start_y: int, end_x: int, end_y: int,
                     obj: Optional[WorldObj] = None) -> Tuple[int, int]:
        """
        Pick a uniformly random free cell with start <= x, y <= end (inclusive).

        A cell is free when it is empty and not under the agent. If obj is
        given it is stored in the chosen cell. The caller must make sure
        the rectangle has at least one free cell; otherwise this never
        returns.
        """
        if not (start_x <= end_x and start_y <= end_y):
            raise MiniGridError(
                f"Empty placement rectangle ({start_x}, {start_y})-({end_x}, {end_y})"
            )
        if not (self.grid.in_bounds(start_x, start_y)
                and self.grid.in_bounds(end_x, end_y)):
            raise MiniGridError(
                f"Placement rectangle ({start_x}, {start_y})-({end_x}, {end_y}) "
                "leaves the grid"
            )
        while True:
            x = int(self.rng.integers(start_x, end_x + 1))
            y = int(self.rng.integers(start_y, end_y + 1))
            # Don't place on top of another object
            if self.grid.cells[y][x].type != ObjectType.EMPTY:
                continue
            # Don't place where the agent is
            if (x, y) == self.agent_pos:
                continue
            break

        if obj is not None:
            self.grid.set(x, y, obj)
        return x, y

    def place_agent(self, start_x: int = 0, start_y: int = 0,
                    end_x: int = -1, end_y: int = -1) -> Tuple[int, int]:
        """
        Move the agent to a random free cell in the rectangle.

        An end bound of -1 means the last column/row. The agent's previous
        cell is eligible. Direction is random when configured as -1.
        """
        end_x = self.width - 1 if end_x == -1 else end_x
        end_y = self.height - 1 if end_y == -1 else end_y
        self.agent_pos = (-1, -1)
        self.agent_pos = self.place_object(start_x, start_y, end_x, end_y)
        if self.agent_start_dir == RANDOM_DIR:
            self.agent_dir = int(self.rng.integers(0, 4))
        else:
            self.agent_dir = self.agent_start_dir
        return self.agent_pos

    # --- Observation ---

    def render_observation(self, out: np.ndarray) -> np.ndarray:
        """Write the agent's (view, view, 3) observation into out."""
        return view.render_observation(
            self.grid, self.agent_pos, self.agent_dir, self.carrying,
            self.agent_view_size, self.see_through_walls, out,
        )

    def observation(self) -> np.ndarray:
        """Allocate a fresh observation array and render into it."""
        size = self.agent_view_size
        out = np.zeros((size, size, 3), dtype=np.uint8)
        return self.render_observation(out)

    def render(self) -> str:
        """ASCII rendering of the grid with the agent drawn as an arrow."""
        lines = self.grid.render().split("\n")
        x, y = self.agent_pos
        if self.grid.in_bounds(x, y):
            row = lines[y]
            lines[y] = row[:x] + ">v<^"[self.agent_dir % 4] + row[x + 1:]
        return "\n".join(lines)
