"""
Environments: the MiniGrid rules and the levels built on them.

MiniGridEnv implements the dynamics shared by every level:
- Turning, moving forward, picking up, dropping and toggling objects
- Goal reward decaying with the number of steps taken
- Truncation at max_steps
- Random placement of the agent and objects
- The agent's egocentric, occluded view

Levels subclass it and only lay out the grid.
"""

from minigrid_core.worlds.minigrid_env import (
    Action, EnvConfig, MiniGridEnv, RANDOM_DIR, DIR_TO_VEC,
)
from minigrid_core.worlds.levels import (
    EmptyEnv, DoorKeyEnv, LayoutEnv, make_empty, make_door_key, make_layout,
)

__all__ = [
    "Action",
    "EnvConfig",
    "MiniGridEnv",
    "RANDOM_DIR",
    "DIR_TO_VEC",
    "EmptyEnv",
    "DoorKeyEnv",
    "LayoutEnv",
    "make_empty",
    "make_door_key",
    "make_layout",
]
