"""
Expression & Variable Evaluator

Resolves textual operands to integers, applies the four arithmetic operators
and performs the assignment statements. Every function returns a ``Result``:
``Ok(value)`` or ``Err(Fault)``. Nothing here raises for a user error.

Operands::

    42  -7          integer literal (signed 32-bit)
    x               scalar variable
    a[3]            array element, literal index
    a.length        array length
"""

from typing import Tuple

from ..frontend.lines import Assignment, ELEMENT_OPERAND, LENGTH_OPERAND, LITERAL_OPERAND
from ..runtime.context import InterpreterContext
from ..shared import errors
from ..shared.errors import Fault
from ..shared.types import Array, Scalar, ValueKind, fits_int32, wrap_int32
from ..utils.base import Result
from ..utils.config import MAX_ARRAY_LENGTH

IntResult = Result[int, Fault]


# -----------------------------------------------------------------------------
# Reads
# -----------------------------------------------------------------------------


def read_array(ctx: InterpreterContext, name: str) -> Result[Array, Fault]:
    value = ctx.variables.get(name)
    if value is None:
        return Result.err(errors.undefined_variable(name))
    if not isinstance(value, Array):
        return Result.err(errors.type_mismatch(ValueKind.ARRAY.value, value.kind.value, name))
    return Result.ok(value)


def read_scalar(ctx: InterpreterContext, name: str) -> IntResult:
    value = ctx.variables.get(name)
    if value is None:
        return Result.err(errors.undefined_variable(name))
    if not isinstance(value, Scalar):
        return Result.err(errors.type_mismatch(ValueKind.SCALAR.value, value.kind.value, name))
    return Result.ok(value.value)


def read_element(ctx: InterpreterContext, name: str, index: int) -> IntResult:
    def _get(array: Array) -> IntResult:
        if not array.in_bounds(index):
            return Result.err(errors.index_out_of_bounds(name, index, len(array)))
        return Result.ok(array.get(index))

    return read_array(ctx, name).and_then(_get)


def read_length(ctx: InterpreterContext, name: str) -> IntResult:
    return read_array(ctx, name).map(len)


def parse_literal(text: str) -> IntResult:
    if not LITERAL_OPERAND.match(text):
        return Result.err(errors.malformed_literal(text))
    value = int(text)
    if not fits_int32(value):
        return Result.err(errors.malformed_literal(text))
    return Result.ok(value)


def resolve_operand(ctx: InterpreterContext, text: str) -> IntResult:
    """Resolve one operand to an integer."""
    m = ELEMENT_OPERAND.match(text)
    if m:
        return read_element(ctx, m.group(1), int(m.group(2)))
    m = LENGTH_OPERAND.match(text)
    if m:
        return read_length(ctx, m.group(1))
    if text in ctx.variables:
        return read_scalar(ctx, text)
    return parse_literal(text)


# -----------------------------------------------------------------------------
# Arithmetic
# -----------------------------------------------------------------------------


def _truncating_div(left: int, right: int) -> int:
    # integer division rounds toward zero
    quotient = abs(left) // abs(right)
    return quotient if (left >= 0) == (right >= 0) else -quotient


def apply_operator(left: int, op: str, right: int) -> IntResult:
    if op == "+":
        return Result.ok(wrap_int32(left + right))
    if op == "-":
        return Result.ok(wrap_int32(left - right))
    if op == "*":
        return Result.ok(wrap_int32(left * right))
    if op == "/":
        if right == 0:
            return Result.err(errors.division_by_zero())
        return Result.ok(wrap_int32(_truncating_div(left, right)))
    raise ValueError(f"unknown operator: {op}")


def evaluate_binary(ctx: InterpreterContext, left: str, op: str, right: str) -> IntResult:
    left_result = resolve_operand(ctx, left)
    if left_result.is_err():
        return left_result
    right_result = resolve_operand(ctx, right)
    if right_result.is_err():
        return right_result
    return apply_operator(left_result.unwrap(), op, right_result.unwrap())


def evaluate_rhs(ctx: InterpreterContext, assignment: Assignment) -> IntResult:
    if assignment.is_binary:
        return evaluate_binary(ctx, assignment.left, assignment.op, assignment.right)
    return resolve_operand(ctx, assignment.left)


# -----------------------------------------------------------------------------
# Writes
# -----------------------------------------------------------------------------


def create_array(ctx: InterpreterContext, name: str, length: int) -> Result[Array, Fault]:
    """
    ``int[] a = new int[n];`` replaces an existing array but never a scalar.

    The length is a literal: it must fit in 32 bits and stay within
    ``MAX_ARRAY_LENGTH``.
    """
    if not fits_int32(length):
        return Result.err(errors.malformed_literal(str(length)))
    if length > MAX_ARRAY_LENGTH:
        return Result.err(errors.array_too_large(name, length, MAX_ARRAY_LENGTH))
    kind = ctx.variables.kind_of(name)
    if kind is ValueKind.SCALAR:
        return Result.err(errors.type_mismatch(ValueKind.ARRAY.value, kind.value, name))
    try:
        array = ctx.variables.create_array(name, length)
    except MemoryError:
        return Result.err(errors.array_too_large(name, length, MAX_ARRAY_LENGTH))
    return Result.ok(array)


def execute_assignment(ctx: InterpreterContext, assignment: Assignment) -> Result[Tuple[str, int], Fault]:
    """
    Perform a scalar or element assignment.

    The right-hand side is evaluated before the target is touched, so a fault
    (division by zero, bad operand) leaves the target unmodified.
    """
    value_result = evaluate_rhs(ctx, assignment)
    if value_result.is_err():
        return Result.err(value_result.unwrap_err())
    value = value_result.unwrap()
    name = assignment.target

    if assignment.is_element:
        array_result = read_array(ctx, name)
        if array_result.is_err():
            return Result.err(array_result.unwrap_err())
        array = array_result.unwrap()
        if not array.in_bounds(assignment.index):
            return Result.err(errors.index_out_of_bounds(name, assignment.index, len(array)))
        ctx.variables.set_element(name, assignment.index, value)
        return Result.ok((name, value))

    kind = ctx.variables.kind_of(name)
    if kind is ValueKind.ARRAY:
        return Result.err(errors.type_mismatch(ValueKind.SCALAR.value, kind.value, name))
    ctx.variables.set_scalar(name, value)
    return Result.ok((name, value))
