"""
Test utilities for the blocklyvm test suite.

Programs in tests are written as indented triple-quoted strings; ``program``
turns them into the trimmed line list the front end would submit.
"""

import sys
from pathlib import Path
from typing import List

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from blocklyvm.utils.io_utils import split_program
from blocklyvm.world.actuator import LeafAction, RecordingWorld


def program(source: str) -> List[str]:
    return split_program(source)


def statements(world: RecordingWorld) -> List[str]:
    """Performed leaf actions as the lines that triggered them."""
    return [action.statement for action in world.performed]


def count(world: RecordingWorld, action: LeafAction) -> int:
    return sum(1 for performed in world.performed if performed is action)
