"""
Result type for the evaluators.

Every step that can fail on user input (operand resolution, arithmetic,
condition evaluation, calls) returns ``Result.ok(value)`` or
``Result.err(fault)``; the dispatcher is the only place that looks at the
error side and records it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, TypeVar, Union

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class ResultTag(Enum):
    OK = "ok"
    ERR = "err"


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Ok(T) | Err(E)"""
    tag: ResultTag
    value: Union[T, E]

    @classmethod
    def ok(cls, value: T) -> 'Result[T, E]':
        return cls(ResultTag.OK, value)

    @classmethod
    def err(cls, error: E) -> 'Result[T, E]':
        return cls(ResultTag.ERR, error)

    def is_ok(self) -> bool:
        return self.tag is ResultTag.OK

    def is_err(self) -> bool:
        return self.tag is ResultTag.ERR

    def unwrap(self) -> T:
        """Ok value; calling this on an Err is a bug in the caller."""
        if self.is_err():
            raise ValueError(f"unwrap() on Err: {self.value}")
        return self.value

    def unwrap_err(self) -> E:
        if self.is_ok():
            raise ValueError(f"unwrap_err() on Ok: {self.value}")
        return self.value

    def map(self, func: Callable[[T], U]) -> 'Result[U, E]':
        """Apply ``func`` to an Ok value; an Err passes through untouched."""
        return Result.ok(func(self.value)) if self.is_ok() else self

    def and_then(self, func: Callable[[T], 'Result[U, E]']) -> 'Result[U, E]':
        """Chain a step that may fail itself."""
        return func(self.value) if self.is_ok() else self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})" if self.is_ok() else f"Err({self.value!r})"
