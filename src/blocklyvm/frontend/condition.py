"""
Condition Boundary

Evaluates the boolean expression wrapped in an if/while opening line, e.g.
``solange (x < a.length && !WandOben()) {``. The expression is parsed with
lark (grammar.lark) and interpreted top-down so ``&&`` and ``||``
short-circuit.

Inside a function definition nothing is evaluated: conditions there are only
captured, so ``evaluate`` answers False without looking at the text.
"""

import logging
from pathlib import Path
from typing import Optional, Pattern

from lark import Lark, Tree
from lark.exceptions import LarkError, UnexpectedInput
from lark.visitors import Interpreter

from ..runtime.context import InterpreterContext
from ..shared import errors
from ..shared.errors import ErrorKind, Fault
from ..utils.base import Result
from ..utils.config import DEFAULT_PARSER_CACHE_FILE
from ..world.actuator import Direction

logger = logging.getLogger("blocklyvm.frontend.condition")

WALL_DIRECTIONS = {
    "naheWand": None,
    "WandOben": Direction.UP,
    "WandUnten": Direction.DOWN,
    "WandLinks": Direction.LEFT,
    "WandRechts": Direction.RIGHT,
}

_COMPARISONS = {
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    "<": lambda a, b: a < b,
    "<=": lambda a, b: a <= b,
    ">": lambda a, b: a > b,
    ">=": lambda a, b: a >= b,
}


class ConditionParser:
    """
    Lark front end for the condition language.

    Uses LALR with lark's native cache so the grammar is compiled once per
    machine rather than once per process.
    """

    def __init__(self, cache_file: str = DEFAULT_PARSER_CACHE_FILE):
        grammar_path = Path(__file__).parent / "grammar.lark"
        self.parser = Lark.open(
            grammar_path,
            start="start",
            parser="lalr",
            cache=cache_file,
            maybe_placeholders=False,
        )

    def parse(self, text: str) -> Tree:
        return self.parser.parse(text)


_parser: Optional[ConditionParser] = None


def get_parser() -> ConditionParser:
    global _parser
    if _parser is None:
        _parser = ConditionParser()
    return _parser


class _ConditionFault(Exception):
    """Carries a Fault out of the tree interpreter."""
    def __init__(self, fault: Fault):
        super().__init__(fault.message)
        self.fault = fault


class ConditionInterpreter(Interpreter):
    """Evaluates a parsed condition against the current variables and world."""

    def __init__(self, ctx: InterpreterContext):
        super().__init__()
        self.ctx = ctx

    # -- boolean structure --------------------------------------------------

    def or_(self, tree: Tree) -> bool:
        left, right = tree.children
        return self.visit(left) or self.visit(right)

    def and_(self, tree: Tree) -> bool:
        left, right = tree.children
        return self.visit(left) and self.visit(right)

    def not_(self, tree: Tree) -> bool:
        return not self.visit(tree.children[0])

    def boolean(self, tree: Tree) -> bool:
        return str(tree.children[0]) in ("wahr", "true")

    def comparison(self, tree: Tree) -> bool:
        left, op, right = tree.children
        return _COMPARISONS[str(op)](self.visit(left), self.visit(right))

    def predicate(self, tree: Tree) -> bool:
        name = str(tree.children[0])
        if name not in WALL_DIRECTIONS:
            raise _ConditionFault(errors.invalid_condition(f"unknown predicate {name}()"))
        return self.ctx.world.wall_nearby(WALL_DIRECTIONS[name])

    # -- arithmetic ----------------------------------------------------------

    def binary(self, tree: Tree) -> int:
        from ..interpreter.expressions import apply_operator

        left, op, right = tree.children
        return self._unwrap(apply_operator(self.visit(left), str(op), self.visit(right)))

    def number(self, tree: Tree) -> int:
        from ..interpreter.expressions import parse_literal

        return self._unwrap(parse_literal(str(tree.children[0])))

    def variable(self, tree: Tree) -> int:
        from ..interpreter.expressions import read_scalar

        return self._unwrap(read_scalar(self.ctx, str(tree.children[0])))

    def element(self, tree: Tree) -> int:
        from ..interpreter.expressions import read_element

        name, index = tree.children
        return self._unwrap(read_element(self.ctx, str(name), int(index)))

    def attribute(self, tree: Tree) -> int:
        from ..interpreter.expressions import read_length

        name, attr = tree.children
        if str(attr) != "length":
            raise _ConditionFault(errors.invalid_condition(f"unknown attribute {name}.{attr}"))
        return self._unwrap(read_length(self.ctx, str(name)))

    def _unwrap(self, result: Result) -> int:
        if result.is_err():
            fault = result.unwrap_err()
            if fault.kind is ErrorKind.UNDEFINED_VARIABLE:
                # identifiers in conditions that cannot be resolved make the condition invalid
                fault = errors.invalid_condition(fault.message)
            raise _ConditionFault(fault)
        return result.unwrap()


class ConditionEvaluator:
    """``evaluate(ctx, line, pattern) -> Result[bool, Fault]``."""

    def __init__(self, parser: Optional[ConditionParser] = None):
        self._parser = parser

    @property
    def parser(self) -> ConditionParser:
        if self._parser is None:
            self._parser = get_parser()
        return self._parser

    def evaluate(self, ctx: InterpreterContext, line: str, pattern: Pattern) -> Result[bool, Fault]:
        if ctx.in_function_definition:
            return Result.ok(False)
        m = pattern.match(line)
        if m is None:
            return Result.err(errors.invalid_condition(line))
        text = m.group(1)
        try:
            tree = self.parser.parse(text)
        except UnexpectedInput as e:
            logger.debug(f"condition parse error in {text!r}: {e}")
            return Result.err(errors.invalid_condition(line))
        except LarkError as e:
            return Result.err(errors.invalid_condition(f"{line} ({e})"))
        try:
            result = bool(ConditionInterpreter(ctx).visit(tree))
        except _ConditionFault as e:
            return Result.err(e.fault)
        logger.debug(f"Result of current condition {text!r}: {result}")
        return Result.ok(result)
