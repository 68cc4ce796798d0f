"""
blocklyvm: interpreter for block programs that drive a hero in the dungeon.

    from blocklyvm import Interpreter

    interpreter = Interpreter()
    outcome = interpreter.run(["int x = 2;", "wiederhole x Mal {", "oben();", "}"])
"""

from .runtime.runtime import Interpreter, Outcome, OutcomeKind
from .runtime.session import ProgramSession, Response
from .runtime.context import InterpreterContext
from .shared.errors import ErrorKind, Fault, BlocklyError, ProgramAlreadyRunning
from .world.actuator import Direction, LeafAction, World, RecordingWorld
from .world.hud import HudNotifier, RecordingHud
from .utils.io_utils import split_program

__version__ = "0.1.0"

__all__ = [
    "Interpreter", "Outcome", "OutcomeKind",
    "ProgramSession", "Response",
    "InterpreterContext",
    "ErrorKind", "Fault", "BlocklyError", "ProgramAlreadyRunning",
    "Direction", "LeafAction", "World", "RecordingWorld",
    "HudNotifier", "RecordingHud",
    "split_program",
]
