"""
Action Dispatcher

Single re-entrant entry point of the interpreter. Each call processes one
line in a fixed order:

1. capture the line into every capturing loop/function body at this depth
2. ``}`` with an open scope: close it and stop
3. scope openers (if, else, while, repeat, function definition)
4. execute-gate: stop unless the enclosing scopes allow execution
5. assignment, user function call, leaf action; an assignment-shaped line
   matching no exact form is a malformed-literal fault

Faults from any step are recorded in the execution flags; dispatch never
raises for an error in the user's program.
"""

import logging
from typing import Optional

from ..frontend import lines
from ..frontend.condition import ConditionEvaluator
from ..runtime.context import InterpreterContext
from ..shared import errors
from ..shared.errors import Fault, format_fault
from ..utils.base import Result
from ..world.actuator import LeafAction
from .expressions import create_array, execute_assignment
from .functions import FunctionRegistry
from .scopes import ScopeEngine

logger = logging.getLogger("blocklyvm.interpreter.dispatcher")

_OK: Result[None, Fault] = Result.ok(None)


class Dispatcher:
    def __init__(self, ctx: InterpreterContext, conditions: Optional[ConditionEvaluator] = None):
        self.ctx = ctx
        self.conditions = conditions if conditions is not None else ConditionEvaluator()
        self.functions = FunctionRegistry(ctx, self.dispatch)
        self.scopes = ScopeEngine(ctx, self.conditions, self.functions, self.dispatch)

    def dispatch(self, line: str) -> None:
        """Process one trimmed, non-empty line."""
        if self.ctx.flags.interrupted:
            return
        logger.debug(f"Processing action: {line}")
        result = self._process(line)
        if result.is_err():
            self._fail(result.unwrap_err().at(line))

    def _process(self, line: str) -> Result[None, Fault]:
        ctx = self.ctx
        ctx.capture(line)

        if lines.is_scope_close(line) and ctx.scopes:
            result = self.scopes.close()
            logger.debug(f"Scopes after eval: {ctx.scopes}")
            return result

        opened = self._open_scope(line)
        if opened is not None:
            return opened

        if not ctx.gate_open():
            return _OK

        array = lines.match_array_creation(line)
        if array is not None:
            name, length = array
            return create_array(ctx, name, length).map(lambda _: None)

        assignment = lines.match_assignment(line)
        if assignment is not None:
            return execute_assignment(ctx, assignment).map(lambda _: None)
        text = lines.match_unrecognised_assignment(line)
        if text is not None:
            return Result.err(errors.malformed_literal(text))

        name = lines.match_call(line)
        if name is None:
            return _OK
        if not self.functions.is_reserved(name):
            return self.functions.call(name)
        action = LeafAction.from_name(name)
        if action is not None:
            logger.debug(f"Performing {action.name}")
            ctx.world.perform(action)
        return _OK

    def _open_scope(self, line: str) -> Optional[Result[None, Fault]]:
        """Open or update a scope if ``line`` is a scope opener, else None."""
        if lines.match_if(line):
            return self.scopes.open_if(line)
        if lines.match_else(line):
            return self.scopes.enter_else(line)
        if lines.match_while(line):
            return self.scopes.open_while(line)
        operand = lines.match_repeat(line)
        if operand is not None:
            return self.scopes.open_repeat(operand)
        name = lines.match_function_definition(line)
        if name is not None:
            return self.scopes.open_function(name)
        return None

    def _fail(self, fault: Fault) -> None:
        logger.info(format_fault(fault, color=False))
        self.ctx.flags.fail(fault)
