#!/usr/bin/env python3
"""
Parametrized demos tests - loads all demo programs together upfront.

Every demo runs in the same 5x5 room (tiles 0..4 in both directions, walls
all around) with the hero starting in the lower left corner.
"""

import pytest
from pathlib import Path
from blocklyvm import ErrorKind, Interpreter, RecordingHud, RecordingWorld
from blocklyvm.utils.io_utils import read_program_lines


_DEMOS_CACHE = {}

def _load_all_demos():
    """Load all demo programs into cache once"""
    if _DEMOS_CACHE:
        return

    project_root = Path(__file__).parent.parent.parent
    demos_dir = project_root / "examples" / "demos"
    if demos_dir.exists():
        for f in sorted(demos_dir.glob("*.blk")):
            _DEMOS_CACHE[f.stem] = read_program_lines(f)

_load_all_demos()


def get_demos_params():
    return [pytest.param(name, id=name) for name in _DEMOS_CACHE.keys()]


def _room(size: int = 5):
    walls = set()
    for i in range(-1, size + 1):
        walls.update({(i, -1), (i, size), (-1, i), (size, i)})
    return walls


def _run_demo(name: str):
    world = RecordingWorld(walls=_room())
    interpreter = Interpreter(world=world, hud=RecordingHud())
    outcome = interpreter.run(_DEMOS_CACHE[name])
    return outcome, interpreter, world


class TestDemos:
    """Tests for demo programs"""

    @pytest.mark.parametrize("demo_name", get_demos_params())
    def test_execution(self, demo_name):
        lines = _DEMOS_CACHE[demo_name]
        expected_fail = any("EXPECTED TO FAIL" in line for line in lines)
        outcome, interpreter, _ = _run_demo(demo_name)
        if expected_fail:
            assert outcome.is_failed, f"Demo {demo_name} should have failed"
        else:
            assert outcome.success, f"Demo {demo_name} failed: {outcome.message}"
            assert interpreter.scope_depth == 0

    def test_treppe(self):
        _, _, world = _run_demo("treppe")
        assert world.hero_position() == (4, 4)

    def test_zur_wand(self):
        _, interpreter, world = _run_demo("zur_wand")
        assert world.hero_position() == (0, 4)
        assert interpreter.variables["schritte"] == 4
        assert world.fireballs == [((0, 4), world.performed[-1].direction)]

    def test_fibonacci(self):
        _, interpreter, _ = _run_demo("fibonacci")
        assert interpreter.variables["a"] == 55
        assert interpreter.variables["b"] == 89
        assert interpreter.variables["letzte"] == [55, 89, 144]

    def test_quadrat(self):
        _, interpreter, world = _run_demo("quadrat")
        assert len(world.performed) == 16
        assert world.hero_position() == (0, 0)
        assert set(interpreter.functions) == {"seite", "quadrat"}

    def test_suche(self):
        _, interpreter, world = _run_demo("suche")
        assert world.hero_position() == (4, 0)
        assert interpreter.variables["schritte"] == 4
        assert len(world.fireballs) == 4

    def test_fehler(self):
        outcome, _, world = _run_demo("fehler")
        assert outcome.error is ErrorKind.INDEX_OUT_OF_BOUNDS
        assert outcome.last_action == "feld[3] = 1;"
        assert len(world.performed) == 3
