"""
Runtime

Program-level facade over the dispatcher: runs a list of lines, reports the
outcome and resets all state between independent programs.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from ..frontend.condition import ConditionEvaluator
from ..interpreter.dispatcher import Dispatcher
from ..shared.errors import ErrorKind, Fault
from ..world.actuator import RecordingWorld, World
from ..world.hud import HudNotifier
from .context import InterpreterContext

logger = logging.getLogger("blocklyvm.runtime.runtime")


class OutcomeKind(Enum):
    COMPLETED = "completed"
    INTERRUPTED = "interrupted"
    FAILED = "failed"


@dataclass(frozen=True)
class Outcome:
    """
    Result of one ``run``.

    For FAILED, ``last_action`` is the literal line that was being dispatched
    when the fault occurred, ``message`` the fault message and ``kind`` its
    kind; ``line_number`` is the 1-based index of the submitted line that was
    running at the time.
    """
    kind: OutcomeKind
    last_action: Optional[str] = None
    message: str = ""
    error: Optional[ErrorKind] = None
    line_number: Optional[int] = None
    fault: Optional[Fault] = None

    @classmethod
    def completed(cls) -> "Outcome":
        return cls(OutcomeKind.COMPLETED)

    @classmethod
    def interrupted(cls, line_number: Optional[int] = None) -> "Outcome":
        return cls(OutcomeKind.INTERRUPTED, line_number=line_number)

    @classmethod
    def failed(cls, fault: Fault, line_number: Optional[int] = None) -> "Outcome":
        return cls(
            OutcomeKind.FAILED,
            last_action=fault.line,
            message=fault.message,
            error=fault.kind,
            line_number=line_number,
            fault=fault,
        )

    @property
    def success(self) -> bool:
        return self.kind is OutcomeKind.COMPLETED

    @property
    def is_interrupted(self) -> bool:
        return self.kind is OutcomeKind.INTERRUPTED

    @property
    def is_failed(self) -> bool:
        return self.kind is OutcomeKind.FAILED


class Interpreter:
    """
    Block-program interpreter.

    One program runs at a time. ``interrupt`` may be called from another
    thread (e.g. the game's reset button); the running program stops before
    its next line.
    """

    def __init__(
        self,
        world: Optional[World] = None,
        hud: Optional[HudNotifier] = None,
        conditions: Optional[ConditionEvaluator] = None,
    ):
        self.ctx = InterpreterContext(world if world is not None else RecordingWorld(), hud)
        self.dispatcher = Dispatcher(self.ctx, conditions)

    @property
    def world(self) -> World:
        return self.ctx.world

    @property
    def hud(self) -> Optional[HudNotifier]:
        return self.ctx.hud

    def run(self, lines: Iterable[str]) -> Outcome:
        """Dispatch ``lines`` in order until they are exhausted, a fault occurs or an interrupt arrives."""
        flags = self.ctx.flags
        line_number = None
        for line_number, line in enumerate(lines, start=1):
            if flags.interrupted:
                break
            self.dispatcher.dispatch(line)
        if flags.errored and flags.fault is not None:
            logger.info(f"Program failed at line {line_number}: {flags.message}")
            return Outcome.failed(flags.fault, line_number)
        if flags.interrupted:
            logger.info("Interruption performed")
            return Outcome.interrupted(line_number)
        return Outcome.completed()

    def dispatch(self, line: str) -> None:
        self.dispatcher.dispatch(line)

    def interrupt(self) -> None:
        self.ctx.flags.interrupt()

    def reset_all(self) -> None:
        """Clear variables, functions, every scope stack and the flags."""
        self.ctx.reset()
        logger.debug("Values cleared")

    # -- inspection --------------------------------------------------------

    @property
    def variables(self) -> Dict[str, object]:
        return self.ctx.variables.snapshot()

    @property
    def functions(self) -> Dict[str, List[str]]:
        return {name: list(body) for name, body in self.ctx.functions.items()}

    @property
    def scope_depth(self) -> int:
        return self.ctx.scope_depth
