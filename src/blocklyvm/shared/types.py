"""
Value Types

The language has exactly one scalar type (signed 32-bit integer) and one
composite type (integer array whose length is fixed at creation).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

import numpy as np

from ..utils.config import INT_BITS, INT_MAX, INT_MIN


class ValueKind(Enum):
    """Variable kind. Values are the names used in diagnostics."""
    SCALAR = "base"
    ARRAY = "array"


def wrap_int32(value: int) -> int:
    """Wrap an arbitrary Python int to signed 32-bit two's complement."""
    value &= (1 << INT_BITS) - 1
    if value > INT_MAX:
        value -= 1 << INT_BITS
    return value


def fits_int32(value: int) -> bool:
    return INT_MIN <= value <= INT_MAX


@dataclass
class Scalar:
    """Integer variable."""
    value: int
    kind: ValueKind = field(default=ValueKind.SCALAR, init=False)

    def snapshot(self) -> int:
        return self.value


@dataclass
class Array:
    """
    Fixed-length integer array, zero-initialized.

    Elements live in a numpy int32 buffer; writes go through ``set`` so the
    length never changes after creation.
    """
    values: np.ndarray
    kind: ValueKind = field(default=ValueKind.ARRAY, init=False)

    @classmethod
    def zeros(cls, length: int) -> "Array":
        return cls(np.zeros(length, dtype=np.int32))

    def __len__(self) -> int:
        return int(self.values.shape[0])

    def in_bounds(self, index: int) -> bool:
        return 0 <= index < len(self)

    def get(self, index: int) -> int:
        return int(self.values[index])

    def set(self, index: int, value: int) -> None:
        self.values[index] = wrap_int32(value)

    def snapshot(self) -> List[int]:
        return [int(v) for v in self.values.tolist()]


Value = Union[Scalar, Array]
