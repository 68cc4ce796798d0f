"""
Actuator boundary: leaf actions and the world they act on.

A leaf action is a terminal instruction (move or throw a fireball) that the
interpreter forwards to the game. ``World.perform`` is synchronous and may
block for up to one rendering frame so hero movement stays in step with the
game loop.
"""

import logging
import time
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, List, Optional, Set, Tuple

from ..utils.config import (
    DEFAULT_FRAME_DELAY, DEFAULT_HERO_START,
    FIRE_DOWN_NAME, FIRE_LEFT_NAME, FIRE_RIGHT_NAME, FIRE_UP_NAME,
    MOVE_DOWN_NAME, MOVE_LEFT_NAME, MOVE_RIGHT_NAME, MOVE_UP_NAME,
)

logger = logging.getLogger("blocklyvm.world.actuator")

Position = Tuple[int, int]


class Direction(Enum):
    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class LeafAction(Enum):
    """Closed set of leaf actions. Value is the call name used in programs."""
    MOVE_UP = MOVE_UP_NAME
    MOVE_DOWN = MOVE_DOWN_NAME
    MOVE_LEFT = MOVE_LEFT_NAME
    MOVE_RIGHT = MOVE_RIGHT_NAME
    FIRE_UP = FIRE_UP_NAME
    FIRE_DOWN = FIRE_DOWN_NAME
    FIRE_LEFT = FIRE_LEFT_NAME
    FIRE_RIGHT = FIRE_RIGHT_NAME

    @property
    def is_fireball(self) -> bool:
        return self.name.startswith("FIRE_")

    @property
    def direction(self) -> Direction:
        return Direction[self.name.split("_", 1)[1]]

    @property
    def statement(self) -> str:
        """Line the front end emits for this action."""
        return f"{self.value}();"

    @classmethod
    def from_name(cls, name: str) -> Optional["LeafAction"]:
        for action in cls:
            if action.value == name:
                return action
        return None


class World(ABC):
    """Game world as seen by the interpreter."""

    @abstractmethod
    def perform(self, action: LeafAction) -> None:
        """Carry out a leaf action; returns once the game has applied it."""

    @abstractmethod
    def wall_nearby(self, direction: Optional[Direction] = None) -> bool:
        """Whether a wall is next to the hero (in any direction when None)."""

    def hero_position(self) -> Position:
        return DEFAULT_HERO_START

    def teleport_to_start(self) -> None:
        pass


class RecordingWorld(World):
    """
    Headless grid world.

    The hero occupies integer tiles; a move steps one tile unless a wall is in
    the way. Every performed action is appended to ``performed``, fireballs to
    ``fireballs`` with their origin. ``on_perform`` is called after each action
    (tests use it to interrupt a running program).
    """

    def __init__(
        self,
        walls: Optional[Set[Position]] = None,
        start: Position = DEFAULT_HERO_START,
        frame_delay: float = DEFAULT_FRAME_DELAY,
        on_perform: Optional[Callable[[LeafAction], None]] = None,
    ):
        self.walls: Set[Position] = set(walls or ())
        self.start = start
        self.position: Position = start
        self.frame_delay = frame_delay
        self.on_perform = on_perform
        self.performed: List[LeafAction] = []
        self.fireballs: List[Tuple[Position, Direction]] = []

    def perform(self, action: LeafAction) -> None:
        direction = action.direction
        if action.is_fireball:
            self.fireballs.append((self.position, direction))
        elif not self.wall_nearby(direction):
            x, y = self.position
            self.position = (x + direction.dx, y + direction.dy)
        self.performed.append(action)
        logger.debug(f"performed {action.name}, hero at {self.position}")
        if self.frame_delay > 0:
            time.sleep(self.frame_delay)
        if self.on_perform is not None:
            self.on_perform(action)

    def wall_nearby(self, direction: Optional[Direction] = None) -> bool:
        if direction is None:
            return any(self.wall_nearby(d) for d in Direction)
        x, y = self.position
        return (x + direction.dx, y + direction.dy) in self.walls

    def hero_position(self) -> Position:
        return self.position

    def teleport_to_start(self) -> None:
        self.position = self.start
