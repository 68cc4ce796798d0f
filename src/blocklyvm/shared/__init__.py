"""
Shared components: value types and fault taxonomy.
"""

from .errors import (
    ErrorKind, Fault, format_fault,
    BlocklyError, ProgramAlreadyRunning, BlocklyImplementationError,
)
from .types import ValueKind, Scalar, Array, Value, wrap_int32, fits_int32
