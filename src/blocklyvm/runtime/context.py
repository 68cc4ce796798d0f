"""
Interpreter Context

All mutable state of one program execution: the variable store, the function
table, the scope stack with its per-kind stacks, the replaying set and the
execution flags. Components receive the context explicitly; resetting it is
equivalent to starting over with a fresh interpreter.

Invariants: the kind on top of ``scopes`` always names the kind-specific stack
whose top frame is the innermost open scope; ``replaying`` lists the kinds of
the loops currently in replay, innermost last, and a loop leaving replay must
be on top of it (checked by the scope engine).
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from ..shared.errors import BlocklyImplementationError, Fault
from ..utils.config import SCOPE_FUNCTION, SCOPE_IF, SCOPE_REPEAT, SCOPE_WHILE
from ..world.actuator import World
from ..world.hud import HudNotifier
from .environment import VariableStore

logger = logging.getLogger("blocklyvm.runtime.context")


# -----------------------------------------------------------------------------
# Scope frames
# -----------------------------------------------------------------------------


@dataclass
class IfFrame:
    """Open if-scope. The condition is evaluated once, at the opening line."""
    condition_true: bool
    else_active: bool = False

    @property
    def executing(self) -> bool:
        return self.condition_true or self.else_active

    def enter_else(self) -> None:
        # the else branch is exclusive with the if branch and never re-tested
        self.else_active = not self.condition_true
        self.condition_true = False


@dataclass
class WhileFrame:
    """Open while-loop; ``condition_result`` is the result at the opening line."""
    condition_text: str
    condition_result: bool
    depth: int
    body: List[str] = field(default_factory=list)
    replaying: bool = False

    @property
    def capturing(self) -> bool:
        return not self.replaying


@dataclass
class RepeatFrame:
    """
    Open repeat-loop. ``counter`` is the number of the pass currently running,
    starting at 1; a frame with ``target <= 0`` is inactive and its single
    capture pass executes nothing.
    """
    target: int
    depth: int
    counter: int = 1
    body: List[str] = field(default_factory=list)
    replaying: bool = False

    @property
    def active(self) -> bool:
        return self.target > 0

    @property
    def capturing(self) -> bool:
        return not self.replaying

    def has_next_pass(self) -> bool:
        return self.counter < self.target


@dataclass
class FunctionFrame:
    """Function definition being captured."""
    name: str
    depth: int
    body: List[str] = field(default_factory=list)

    @property
    def capturing(self) -> bool:
        return True


Frame = Union[IfFrame, WhileFrame, RepeatFrame, FunctionFrame]
LoopFrame = Union[WhileFrame, RepeatFrame]


# -----------------------------------------------------------------------------
# Execution flags
# -----------------------------------------------------------------------------


@dataclass
class ExecutionFlags:
    """Process-wide run status. Set together by a fault, reset together."""
    interrupted: bool = False
    errored: bool = False
    message: str = ""
    fault: Optional[Fault] = None

    def fail(self, fault: Fault) -> None:
        # only the first fault of a run is kept
        if self.errored:
            return
        self.interrupted = True
        self.errored = True
        self.message = fault.message
        self.fault = fault

    def interrupt(self) -> None:
        self.interrupted = True

    def reset(self) -> None:
        self.interrupted = False
        self.errored = False
        self.message = ""
        self.fault = None


# -----------------------------------------------------------------------------
# Context
# -----------------------------------------------------------------------------


class InterpreterContext:
    """
    State shared by the dispatcher, the scope engine, the evaluators and the
    function registry. ``depth`` is the dispatch depth of the line currently
    being processed: 0 for submitted lines, +1 per replay pass or inlined call.
    """

    def __init__(self, world: World, hud: Optional[HudNotifier] = None):
        self.world = world
        self.hud = hud
        self.variables = VariableStore(hud)
        self.functions: Dict[str, List[str]] = {}
        self.scopes: List[str] = []
        self.ifs: List[IfFrame] = []
        self.whiles: List[WhileFrame] = []
        self.repeats: List[RepeatFrame] = []
        self.function_defs: List[FunctionFrame] = []
        self.replaying: List[str] = []
        self.flags = ExecutionFlags()
        self.depth = 0

    # -- scope stack -------------------------------------------------------

    def _stack_for(self, kind: str) -> List:
        stacks = {
            SCOPE_IF: self.ifs,
            SCOPE_WHILE: self.whiles,
            SCOPE_REPEAT: self.repeats,
            SCOPE_FUNCTION: self.function_defs,
        }
        try:
            return stacks[kind]
        except KeyError:
            raise BlocklyImplementationError(f"unknown scope kind: {kind}")

    def push_scope(self, kind: str, frame: Frame) -> None:
        self.scopes.append(kind)
        self._stack_for(kind).append(frame)

    def pop_scope(self, kind: str) -> Frame:
        if not self.scopes or self.scopes[-1] != kind:
            raise BlocklyImplementationError(
                f"cannot close {kind} scope, innermost scope is {self.current_scope}"
            )
        stack = self._stack_for(kind)
        if not stack:
            raise BlocklyImplementationError(f"scope stack out of sync: no open {kind} frame")
        self.scopes.pop()
        return stack.pop()

    @property
    def current_scope(self) -> Optional[str]:
        return self.scopes[-1] if self.scopes else None

    @property
    def scope_depth(self) -> int:
        return len(self.scopes)

    @property
    def in_function_definition(self) -> bool:
        return bool(self.function_defs)

    # -- execute gate ------------------------------------------------------

    def gate_open(self) -> bool:
        """
        Whether the current line may mutate variables, call functions or act
        on the world: every if executes, every while's last condition held,
        every repeat is active and no function is being defined.
        """
        return (
            all(frame.executing for frame in self.ifs)
            and all(frame.condition_result for frame in self.whiles)
            and all(frame.active for frame in self.repeats)
            and not self.function_defs
        )

    # -- capture -----------------------------------------------------------

    def capture(self, line: str) -> None:
        """Record ``line`` into every capturing frame opened at the current depth."""
        for stack in (self.whiles, self.repeats, self.function_defs):
            for frame in stack:
                if frame.capturing and frame.depth == self.depth:
                    frame.body.append(line)

    # -- lifecycle ---------------------------------------------------------

    def reset(self) -> None:
        """Clear every structure atomically; collaborators stay attached."""
        self.variables.clear()
        self.functions.clear()
        self.scopes.clear()
        self.ifs.clear()
        self.whiles.clear()
        self.repeats.clear()
        self.function_defs.clear()
        self.replaying.clear()
        self.flags.reset()
        self.depth = 0
        logger.debug("context cleared")
