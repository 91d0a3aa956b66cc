"""
MiniGrid Core: the step-and-observe engine of a grid-world RL environment.

Given a discrete action, the environment updates the agent and the world
(doors, keys, boxes), returns a scalar reward, and renders a partially
observable, agent-centric view of the grid as a small integer tensor.
"""

from minigrid_core.errors import MiniGridError
from minigrid_core.objects import Color, DoorState, ObjectType, WorldObj
from minigrid_core.grid import Grid, grid_from_text, walled_grid
from minigrid_core.worlds.minigrid_env import Action, EnvConfig, MiniGridEnv
from minigrid_core.worlds.levels import DoorKeyEnv, EmptyEnv, LayoutEnv

__version__ = "0.1.0"
__all__ = [
    "MiniGridError",
    "Color",
    "DoorState",
    "ObjectType",
    "WorldObj",
    "Grid",
    "walled_grid",
    "grid_from_text",
    "Action",
    "EnvConfig",
    "MiniGridEnv",
    "DoorKeyEnv",
    "EmptyEnv",
    "LayoutEnv",
]
