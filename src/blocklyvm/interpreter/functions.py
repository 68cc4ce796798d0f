"""
Function Registry

Functions take no arguments and return nothing. A definition is captured
like a loop body (nothing inside it executes while it is open) and stored
when its scope closes. A call inlines the stored lines through the
dispatcher; there is no call frame and no local scope.

Recursion uses the host call stack and is unbounded apart from Python's own
recursion limit, which is reported as a RecursionLimit fault.
"""

import logging
from typing import Callable

from ..runtime.context import FunctionFrame, InterpreterContext
from ..shared import errors
from ..shared.errors import Fault
from ..utils.base import Result
from ..utils.config import RESERVED_FUNCTIONS, SCOPE_CLOSE, SCOPE_FUNCTION

logger = logging.getLogger("blocklyvm.interpreter.functions")


class FunctionRegistry:
    def __init__(self, ctx: InterpreterContext, dispatch: Callable[[str], None]):
        self.ctx = ctx
        self.dispatch = dispatch

    def define(self, name: str) -> None:
        self.ctx.push_scope(SCOPE_FUNCTION, FunctionFrame(name=name, depth=self.ctx.depth))

    def register(self, frame: FunctionFrame) -> None:
        """Store a finished definition, replacing any earlier one of that name."""
        body = list(frame.body)
        # the definition's own closing marker was captured too; it must not be
        # replayed at the call site where it would close the caller's scope
        if body and body[-1] == SCOPE_CLOSE:
            body.pop()
        self.ctx.functions[frame.name] = body
        logger.debug(f"Registered function {frame.name} ({len(body)} lines)")

    def is_reserved(self, name: str) -> bool:
        return name in RESERVED_FUNCTIONS

    def call(self, name: str) -> Result[None, Fault]:
        body = self.ctx.functions.get(name)
        if body is None:
            logger.debug(f"Could not find function {name}")
            return Result.err(errors.undefined_function(name))
        logger.debug(f"Executing function {name}")
        self.ctx.depth += 1
        try:
            for line in list(body):
                self.dispatch(line)
                if self.ctx.flags.interrupted:
                    break
        except RecursionError:
            return Result.err(errors.recursion_limit(name))
        finally:
            self.ctx.depth -= 1
        return Result.ok(None)
