"""
Line Classifier

Regular expressions for every line form the blockly front end emits. Each
matcher returns the captured parts or None; the dispatcher decides what to do
with them. Statements may omit the trailing semicolon.
"""

import re
from dataclasses import dataclass
from typing import Optional

from ..utils.config import (
    ELSE_KEYWORD, FUNCTION_PREFIX, IF_KEYWORD, REPEAT_KEYWORD, REPEAT_SUFFIX,
    SCOPE_CLOSE, WHILE_KEYWORD,
)

# Operand: literal, variable, element access with literal index, or array length
OPERAND = r"-?\w+(?:\[-?\d+\])?(?:\.length)?"
OPERATOR = r"[-+*/]"
IDENT = r"[A-Za-z_]\w*"

_END = r"\s*;?\s*$"

IF_OPEN = re.compile(rf"^{IF_KEYWORD}\s*\((.*)\)\s*\{{?\s*$")
ELSE = re.compile(rf"^(?:\}}\s*)?{ELSE_KEYWORD}\s*\{{?\s*$")
WHILE_OPEN = re.compile(rf"^{WHILE_KEYWORD}\s*\((.*)\)\s*\{{?\s*$")
REPEAT_OPEN = re.compile(rf"^{REPEAT_KEYWORD}\s+({OPERAND})\s+{REPEAT_SUFFIX}\s*\{{?\s*$")
FUNCTION_OPEN = re.compile(rf"^{FUNCTION_PREFIX}\s+({IDENT})\s*\(\s*\)\s*\{{?\s*$")

ARRAY_CREATE = re.compile(rf"^int\s*\[\]\s*({IDENT})\s*=\s*new\s+int\s*\[(\d+)\]{_END}")
ELEMENT_ASSIGN = re.compile(
    rf"^({IDENT})\[(-?\d+)\]\s*=\s*({OPERAND})(?:\s*({OPERATOR})\s*({OPERAND}))?{_END}"
)
SCALAR_ASSIGN = re.compile(
    rf"^(?:int\s+)?({IDENT})\s*=\s*({OPERAND})(?:\s*({OPERATOR})\s*({OPERAND}))?{_END}"
)
CALL = re.compile(rf"^({IDENT})\s*\(\s*\){_END}")

# Anything shaped like an assignment; checked only after the exact forms failed
ASSIGN_LIKE = re.compile(
    rf"^(?:int\s*(?:\[\])?\s+)?({IDENT})(?:\[([^\]]*)\])?\s*=(?!=)\s*(.*?){_END}"
)

# Pieces of a single operand
ELEMENT_OPERAND = re.compile(r"^(\w+)\[(-?\d+)\]$")
LENGTH_OPERAND = re.compile(r"^(\w+)\.length$")
LITERAL_OPERAND = re.compile(r"^-?\d+$")


@dataclass(frozen=True)
class Assignment:
    """Right-hand side of an assignment: one operand, or ``left op right``."""
    target: str
    left: str
    op: Optional[str] = None
    right: Optional[str] = None
    index: Optional[int] = None

    @property
    def is_binary(self) -> bool:
        return self.op is not None

    @property
    def is_element(self) -> bool:
        return self.index is not None


def is_scope_close(line: str) -> bool:
    return line == SCOPE_CLOSE


def match_if(line: str) -> bool:
    return IF_OPEN.match(line) is not None


def match_else(line: str) -> bool:
    return ELSE.match(line) is not None


def match_while(line: str) -> bool:
    return WHILE_OPEN.match(line) is not None


def match_repeat(line: str) -> Optional[str]:
    m = REPEAT_OPEN.match(line)
    return m.group(1) if m else None


def match_function_definition(line: str) -> Optional[str]:
    m = FUNCTION_OPEN.match(line)
    return m.group(1) if m else None


def match_array_creation(line: str):
    """Return (name, length) for ``int[] a = new int[n];``."""
    m = ARRAY_CREATE.match(line)
    return (m.group(1), int(m.group(2))) if m else None


def match_assignment(line: str) -> Optional[Assignment]:
    m = ELEMENT_ASSIGN.match(line)
    if m:
        name, index, left, op, right = m.groups()
        return Assignment(target=name, left=left, op=op, right=right, index=int(index))
    m = SCALAR_ASSIGN.match(line)
    if m:
        name, left, op, right = m.groups()
        return Assignment(target=name, left=left, op=op, right=right)
    return None


def match_call(line: str) -> Optional[str]:
    m = CALL.match(line)
    return m.group(1) if m else None


def match_unrecognised_assignment(line: str) -> Optional[str]:
    """
    For a line shaped like an assignment that matched no exact form, return
    the offending text: a non-literal index, else the whole right-hand side.
    """
    m = ASSIGN_LIKE.match(line)
    if not m:
        return None
    _, index, rhs = m.groups()
    if index is not None and not LITERAL_OPERAND.match(index.strip()):
        return index
    return rhs
