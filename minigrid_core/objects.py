"""
World objects: the content of a single grid cell.

Every cell of a MiniGrid world holds exactly one WorldObj. Its encoding is
a (type, color, state) triple of small integers, the categorical features
an agent receives in its observation.

Only doors and boxes carry extra state:
- Doors: is_open / is_locked flags
- Boxes: an optional nested object (the box's contents)
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple


# ---------------------------------------------------------------------------
# Encoding tables
# ---------------------------------------------------------------------------

class ObjectType(IntEnum):
    """What occupies a grid cell."""
    UNSEEN = 0
    EMPTY = 1
    WALL = 2
    FLOOR = 3
    DOOR = 4
    KEY = 5
    BALL = 6
    BOX = 7
    GOAL = 8
    LAVA = 9
    AGENT = 10


class Color(IntEnum):
    RED = 0
    GREEN = 1
    BLUE = 2
    PURPLE = 3
    YELLOW = 4
    GREY = 5


class DoorState(IntEnum):
    """State channel for doors."""
    OPEN = 0
    CLOSED = 1
    LOCKED = 2


DEFAULT_COLORS = {
    ObjectType.WALL: Color.GREY,
    ObjectType.FLOOR: Color.BLUE,
    ObjectType.GOAL: Color.GREEN,
    ObjectType.LAVA: Color.RED,
}

_OVERLAPPABLE = frozenset({
    ObjectType.EMPTY, ObjectType.FLOOR, ObjectType.GOAL, ObjectType.LAVA,
})
_PICKABLE = frozenset({ObjectType.KEY, ObjectType.BALL, ObjectType.BOX})


@dataclass
class WorldObj:
    """
    One cell's content.

    A WorldObj is a value: copy() duplicates it together with any nested
    box contents. A box owns its contents exclusively; when the box is
    opened the contents take the box's place in the grid and the shell
    is discarded.
    """
    type: ObjectType = ObjectType.EMPTY
    color: Optional[Color] = None
    is_open: bool = False
    is_locked: bool = False
    contains: Optional["WorldObj"] = None

    def __post_init__(self):
        self.type = ObjectType(self.type)
        if self.color is None:
            self.color = DEFAULT_COLORS.get(self.type, Color.RED)
        self.color = Color(self.color)

    # --- Capabilities ---

    def can_overlap(self) -> bool:
        """Can the agent move onto this cell?"""
        if self.type == ObjectType.DOOR:
            # The open flag alone gates traversal; a door unlocked with its
            # key stays flagged locked but is open.
            return self.is_open
        return self.type in _OVERLAPPABLE

    def can_pickup(self) -> bool:
        return self.type in _PICKABLE

    def can_see_behind(self) -> bool:
        if self.type == ObjectType.WALL:
            return False
        if self.type == ObjectType.DOOR:
            return self.is_open
        return True

    # --- Encoding ---

    @property
    def state(self) -> int:
        if self.type != ObjectType.DOOR:
            return 0
        if self.is_open:
            return DoorState.OPEN
        if self.is_locked:
            return DoorState.LOCKED
        return DoorState.CLOSED

    def encode(self) -> Tuple[int, int, int]:
        """(type, color, state) triple."""
        return int(self.type), int(self.color), int(self.state)

    def copy(self) -> "WorldObj":
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        name = self.type.name.lower()
        if self.type == ObjectType.DOOR:
            flag = "open" if self.is_open else ("locked" if self.is_locked else "closed")
            return f"Door({self.color.name.lower()}, {flag})"
        if self.type == ObjectType.BOX:
            return f"Box({self.color.name.lower()}, contains={self.contains!r})"
        if self.type in (ObjectType.KEY, ObjectType.BALL):
            return f"{name.capitalize()}({self.color.name.lower()})"
        return name.capitalize()


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------

def make_empty() -> WorldObj:
    return WorldObj(ObjectType.EMPTY)


def make_wall(color: Color = Color.GREY) -> WorldObj:
    return WorldObj(ObjectType.WALL, color)


def make_door(color: Color, is_open: bool = False,
              is_locked: bool = False) -> WorldObj:
    return WorldObj(ObjectType.DOOR, color, is_open=is_open, is_locked=is_locked)


def make_key(color: Color) -> WorldObj:
    return WorldObj(ObjectType.KEY, color)


def make_ball(color: Color) -> WorldObj:
    return WorldObj(ObjectType.BALL, color)


def make_box(color: Color, contains: Optional[WorldObj] = None) -> WorldObj:
    return WorldObj(ObjectType.BOX, color, contains=contains)


def make_goal() -> WorldObj:
    return WorldObj(ObjectType.GOAL)


def make_lava() -> WorldObj:
    return WorldObj(ObjectType.LAVA)
