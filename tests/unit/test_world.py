#!/usr/bin/env python3
"""
Tests for leaf actions and the headless recording world.
"""

import pytest
from blocklyvm.world.actuator import Direction, LeafAction, RecordingWorld


pytestmark = pytest.mark.unit


class TestLeafAction:
    """Names, directions and statements of the eight leaf actions."""

    def test_closed_set(self):
        assert len(LeafAction) == 8
        assert sum(1 for action in LeafAction if action.is_fireball) == 4

    @pytest.mark.parametrize("name,action,direction", [
        ("oben", LeafAction.MOVE_UP, Direction.UP),
        ("unten", LeafAction.MOVE_DOWN, Direction.DOWN),
        ("links", LeafAction.MOVE_LEFT, Direction.LEFT),
        ("rechts", LeafAction.MOVE_RIGHT, Direction.RIGHT),
        ("feuerballOben", LeafAction.FIRE_UP, Direction.UP),
        ("feuerballUnten", LeafAction.FIRE_DOWN, Direction.DOWN),
        ("feuerballLinks", LeafAction.FIRE_LEFT, Direction.LEFT),
        ("feuerballRechts", LeafAction.FIRE_RIGHT, Direction.RIGHT),
    ])
    def test_from_name(self, name, action, direction):
        assert LeafAction.from_name(name) is action
        assert action.direction is direction
        assert action.statement == f"{name}();"

    def test_unknown_name(self):
        assert LeafAction.from_name("naheWand") is None


class TestRecordingWorld:
    """Grid movement, walls and fireballs."""

    def test_moves(self):
        world = RecordingWorld()
        for action in (LeafAction.MOVE_UP, LeafAction.MOVE_RIGHT, LeafAction.MOVE_RIGHT):
            world.perform(action)
        assert world.hero_position() == (2, 1)

    def test_wall_blocks_move(self):
        world = RecordingWorld(walls={(1, 0)})
        world.perform(LeafAction.MOVE_RIGHT)
        assert world.hero_position() == (0, 0)
        assert world.performed == [LeafAction.MOVE_RIGHT]

    def test_wall_nearby(self):
        world = RecordingWorld(walls={(-1, 0)})
        assert world.wall_nearby()
        assert world.wall_nearby(Direction.LEFT)
        assert not world.wall_nearby(Direction.UP)

    def test_fireball_does_not_move(self):
        world = RecordingWorld(start=(3, 3))
        world.perform(LeafAction.FIRE_DOWN)
        assert world.hero_position() == (3, 3)
        assert world.fireballs == [((3, 3), Direction.DOWN)]

    def test_teleport_and_hook(self):
        seen = []
        world = RecordingWorld(start=(1, 1), on_perform=seen.append)
        world.perform(LeafAction.MOVE_UP)
        assert world.hero_position() == (1, 2)
        world.teleport_to_start()
        assert world.hero_position() == (1, 1)
        assert seen == [LeafAction.MOVE_UP]
