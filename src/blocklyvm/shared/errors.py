"""
Error Reporting

Faults raised by user programs are values (``Fault``) carried through
``Result`` and recorded in the execution flags; they are never thrown past the
dispatcher. Exceptions in this module are for API misuse and internal bugs.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get("BLOCKLYVM_COLOR", "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return True

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_CYAN   = "\033[36m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ---------------------------------------------------------------------------
# Fault taxonomy
# ---------------------------------------------------------------------------

class ErrorKind(Enum):
    """Kinds of faults a block program can run into. Value is the stable code."""
    UNDEFINED_VARIABLE = "E0425"
    TYPE_MISMATCH = "E0308"
    MALFORMED_LITERAL = "E0600"
    INDEX_OUT_OF_BOUNDS = "E0608"
    DIVISION_BY_ZERO = "E0080"
    UNDEFINED_FUNCTION = "E0426"
    INVALID_CONDITION = "E0601"
    UNBALANCED_SCOPE = "E0602"
    RECURSION_LIMIT = "E0603"
    ARRAY_TOO_LARGE = "E0604"

    @property
    def code(self) -> str:
        return self.value


_HELP = {
    ErrorKind.UNDEFINED_VARIABLE: "create the variable before reading it",
    ErrorKind.INDEX_OUT_OF_BOUNDS: "valid indices run from 0 to length - 1",
    ErrorKind.UNDEFINED_FUNCTION: "define the function before calling it",
    ErrorKind.RECURSION_LIMIT: "a function keeps calling itself without stopping",
    ErrorKind.ARRAY_TOO_LARGE: "create a smaller array",
}


@dataclass
class Fault:
    """
    A fault detected while executing one line.

    ``line`` is the literal line being dispatched when the fault occurred; the
    dispatcher fills it in if the evaluator did not.
    """
    kind: ErrorKind
    message: str
    line: Optional[str] = None
    help: Optional[str] = None

    @property
    def code(self) -> str:
        return self.kind.code

    def at(self, line: str) -> "Fault":
        if self.line is None:
            self.line = line
        return self

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Fault constructors
# ---------------------------------------------------------------------------

def undefined_variable(name: str) -> Fault:
    return Fault(ErrorKind.UNDEFINED_VARIABLE, f"Variable not found {name}")


def type_mismatch(expected: str, got: str, name: str) -> Fault:
    return Fault(
        ErrorKind.TYPE_MISMATCH,
        f"Expected {expected} variable. Got {got} for variable {name}",
    )


def malformed_literal(text: str) -> Fault:
    return Fault(ErrorKind.MALFORMED_LITERAL, f"{text} is not a number or variable")


def index_out_of_bounds(name: str, index: int, length: int) -> Fault:
    return Fault(
        ErrorKind.INDEX_OUT_OF_BOUNDS,
        f"Index {index} out of bounds for length {length} in array {name}",
    )


def division_by_zero() -> Fault:
    return Fault(ErrorKind.DIVISION_BY_ZERO, "Division by zero is not allowed.")


def undefined_function(name: str) -> Fault:
    return Fault(ErrorKind.UNDEFINED_FUNCTION, f"Function {name} is not defined")


def invalid_condition(detail: str) -> Fault:
    return Fault(ErrorKind.INVALID_CONDITION, f"Detected condition that is not valid: {detail}")


def unbalanced_scope(detail: str) -> Fault:
    return Fault(ErrorKind.UNBALANCED_SCOPE, detail)


def recursion_limit(name: str) -> Fault:
    return Fault(ErrorKind.RECURSION_LIMIT, f"Function {name} recursed too deeply")


def array_too_large(name: str, length: int, limit: int) -> Fault:
    return Fault(
        ErrorKind.ARRAY_TOO_LARGE,
        f"Array {name} of length {length} exceeds the maximum length {limit}",
    )


# ---------------------------------------------------------------------------
# Formatting engine
# ---------------------------------------------------------------------------

def format_fault(fault: Fault, line_number: Optional[int] = None, color: Optional[bool] = None) -> str:
    """
    Render a fault in the codebase's diagnostic style.

    Example output (plain, no color)::

        error[E0080]: Division by zero is not allowed.
         --> line 3
          |
          | int x = 4 / 0;
          |
    """
    use_color = color if color is not None else _use_color()
    out: List[str] = []
    out.append(
        _style(f"error[{fault.code}]", _BOLD, _RED, color=use_color)
        + _style(f": {fault.message}", _BOLD, color=use_color)
    )
    where = f"line {line_number}" if line_number is not None else "<unknown line>"
    out.append(_style(" --> ", _BOLD, _BLUE, color=use_color) + where)
    if fault.line is not None:
        gutter = _style("  |", _BOLD, _BLUE, color=use_color)
        out.append(gutter)
        out.append(f"{gutter} {fault.line}")
        out.append(gutter)
    help_text = fault.help or _HELP.get(fault.kind)
    if help_text:
        out.append(
            _style("  = ", _BOLD, _CYAN, color=use_color)
            + _style("help: ", _BOLD, color=use_color)
            + help_text
        )
    return "\n".join(out)


# ============================================================================
# Exception Classes
# ============================================================================

class BlocklyError(Exception):
    """Base exception for all blocklyvm errors raised to the host application"""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProgramAlreadyRunning(BlocklyError):
    """A program was submitted while another one is still executing."""
    def __init__(self):
        super().__init__("a program is already running; reset or wait for it to finish")


class BlocklyImplementationError(Exception):
    """
    Error in the interpreter itself (not in the user's block program).

    Use this for invalid internal state, e.g. a scope stack whose top does not
    match the kind-specific stack. Never use it for faults in user programs.
    """
    def __init__(self, message: str, error_code: str = "E9999"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self):
        return f"[{self.error_code}] {self.message}"
