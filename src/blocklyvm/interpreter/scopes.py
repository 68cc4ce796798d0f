"""
Scope & Loop Engine

Opens and closes if/while/repeat/function scopes and implements the
capture-then-replay protocol for loops.

A loop is executed in two modes. While *capturing*, the first pass runs line
by line as the lines arrive and every line (nested scopes included, as raw
text) is appended to the loop body. When the closing ``}`` arrives and the
loop test still holds, the frame switches to *replaying*: the captured body,
which ends with that same ``}``, is re-dispatched through the dispatcher
until a pass through the ``}`` finds the test false and pops the frame.
Nested loops are never pre-parsed; replay re-derives them from the text.
"""

import logging
from typing import Callable

from ..frontend import lines
from ..frontend.condition import ConditionEvaluator
from ..runtime.context import (
    FunctionFrame, IfFrame, InterpreterContext, LoopFrame, RepeatFrame, WhileFrame,
)
from ..shared import errors
from ..shared.errors import BlocklyImplementationError, Fault
from ..utils.base import Result
from ..utils.config import SCOPE_FUNCTION, SCOPE_IF, SCOPE_REPEAT, SCOPE_WHILE
from .expressions import resolve_operand
from .functions import FunctionRegistry

logger = logging.getLogger("blocklyvm.interpreter.scopes")

StepResult = Result[None, Fault]
_OK: StepResult = Result.ok(None)


class ScopeEngine:
    """
    Scope bookkeeping for the dispatcher.

    ``dispatch`` is the dispatcher's entry point; replay goes through it so
    every replayed line gets exactly the treatment of a submitted line.
    """

    def __init__(
        self,
        ctx: InterpreterContext,
        conditions: ConditionEvaluator,
        functions: FunctionRegistry,
        dispatch: Callable[[str], None],
    ):
        self.ctx = ctx
        self.conditions = conditions
        self.functions = functions
        self.dispatch = dispatch

    # -------------------------------------------------------------------------
    # Opening
    # -------------------------------------------------------------------------

    def open_if(self, line: str) -> StepResult:
        condition = False
        if self.ctx.gate_open():
            result = self.conditions.evaluate(self.ctx, line, lines.IF_OPEN)
            if result.is_err():
                return Result.err(result.unwrap_err())
            condition = result.unwrap()
        self.ctx.push_scope(SCOPE_IF, IfFrame(condition_true=condition))
        return _OK

    def enter_else(self, line: str) -> StepResult:
        if self.ctx.current_scope != SCOPE_IF:
            return Result.err(errors.unbalanced_scope(f"'{line}' without an open if"))
        self.ctx.ifs[-1].enter_else()
        return _OK

    def open_while(self, line: str) -> StepResult:
        condition = False
        if self.ctx.gate_open():
            result = self.conditions.evaluate(self.ctx, line, lines.WHILE_OPEN)
            if result.is_err():
                return Result.err(result.unwrap_err())
            condition = result.unwrap()
        frame = WhileFrame(condition_text=line, condition_result=condition, depth=self.ctx.depth)
        self.ctx.push_scope(SCOPE_WHILE, frame)
        return _OK

    def open_repeat(self, operand: str) -> StepResult:
        target = 0
        if self.ctx.gate_open():
            result = resolve_operand(self.ctx, operand)
            if result.is_err():
                return Result.err(result.unwrap_err())
            target = result.unwrap()
        self.ctx.push_scope(SCOPE_REPEAT, RepeatFrame(target=target, depth=self.ctx.depth))
        return _OK

    def open_function(self, name: str) -> StepResult:
        self.functions.define(name)
        return _OK

    # -------------------------------------------------------------------------
    # Closing
    # -------------------------------------------------------------------------

    def close(self) -> StepResult:
        """Handle ``}`` for the innermost scope."""
        kind = self.ctx.current_scope
        if kind == SCOPE_IF:
            self.ctx.pop_scope(SCOPE_IF)
            return _OK
        if kind == SCOPE_WHILE:
            return self._close_while(self.ctx.whiles[-1])
        if kind == SCOPE_REPEAT:
            return self._close_repeat(self.ctx.repeats[-1])
        if kind == SCOPE_FUNCTION:
            frame = self.ctx.pop_scope(SCOPE_FUNCTION)
            assert isinstance(frame, FunctionFrame)
            self.functions.register(frame)
            return _OK
        raise BlocklyImplementationError(f"close() called with scope {kind!r}")

    def _close_while(self, frame: WhileFrame) -> StepResult:
        if not self.ctx.gate_open():
            self._finish(SCOPE_WHILE, frame)
            return _OK
        result = self.conditions.evaluate(self.ctx, frame.condition_text, lines.WHILE_OPEN)
        if result.is_err():
            return Result.err(result.unwrap_err())
        frame.condition_result = result.unwrap()
        if not frame.condition_result:
            self._finish(SCOPE_WHILE, frame)
            return _OK
        if not frame.replaying:
            self._start_replay(SCOPE_WHILE, frame)
        return _OK

    def _close_repeat(self, frame: RepeatFrame) -> StepResult:
        if not (frame.has_next_pass() and self.ctx.gate_open()):
            self._finish(SCOPE_REPEAT, frame)
            return _OK
        frame.counter += 1
        if not frame.replaying:
            self._start_replay(SCOPE_REPEAT, frame)
        return _OK

    # -------------------------------------------------------------------------
    # Replay
    # -------------------------------------------------------------------------

    def _start_replay(self, kind: str, frame: LoopFrame) -> None:
        frame.replaying = True
        self.ctx.replaying.append(kind)
        logger.debug(f"Repeating {kind} loop ({len(frame.body)} lines)")
        self.ctx.depth += 1
        try:
            while frame.replaying and not self.ctx.flags.interrupted:
                for line in list(frame.body):
                    self.dispatch(line)
                    if self.ctx.flags.interrupted:
                        break
        finally:
            self.ctx.depth -= 1

    def _finish(self, kind: str, frame: LoopFrame) -> None:
        if frame.replaying:
            # a replaying loop can only finish once every loop it replays has finished
            if not self.ctx.replaying or self.ctx.replaying[-1] != kind:
                raise BlocklyImplementationError(
                    f"finishing replayed {kind} loop, replaying set is {self.ctx.replaying}"
                )
            frame.replaying = False
            self.ctx.replaying.pop()
        self.ctx.pop_scope(kind)
        logger.debug(f"Ending {kind} loop")
