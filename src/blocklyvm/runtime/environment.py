"""
Variable Store

Single flat namespace for every variable of a program. If/while/repeat and
function bodies do not get their own scopes: a variable created inside a loop
or a function is visible (and writable) everywhere afterwards.

Every successful write is forwarded to the HUD notifier, if one is attached.
"""

import logging
from typing import Dict, List, Optional

from ..shared.types import Array, Scalar, Value, ValueKind, wrap_int32
from ..world.hud import HudNotifier

logger = logging.getLogger("blocklyvm.runtime.environment")


class VariableStore:
    """
    Global name → value map.
    - get(name): lookup, None if undefined
    - set_scalar(name, value): create or overwrite an integer variable
    - create_array(name, length): create (or replace) a zeroed array
    - set_element(name, index, value): write into an existing array
    """
    _values: Dict[str, Value]

    def __init__(self, hud: Optional[HudNotifier] = None):
        self._values = {}
        self.hud = hud

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def get(self, name: str) -> Optional[Value]:
        return self._values.get(name)

    def kind_of(self, name: str) -> Optional[ValueKind]:
        value = self._values.get(name)
        return value.kind if value is not None else None

    def set_scalar(self, name: str, value: int) -> None:
        value = wrap_int32(value)
        current = self._values.get(name)
        if isinstance(current, Scalar):
            current.value = value
        else:
            self._values[name] = Scalar(value)
        logger.debug(f"{name} = {value}")
        if self.hud is not None:
            self.hud.on_scalar_set(name, value)

    def create_array(self, name: str, length: int) -> Array:
        array = Array.zeros(length)
        self._values[name] = array
        logger.debug(f"{name} = int[{length}]")
        self._notify_array(name, array)
        return array

    def set_element(self, name: str, index: int, value: int) -> None:
        array = self._values[name]
        if not isinstance(array, Array):
            raise TypeError(f"{name} is not an array")
        array.set(index, value)
        logger.debug(f"{name}[{index}] = {array.get(index)}")
        self._notify_array(name, array)

    def _notify_array(self, name: str, array: Array) -> None:
        if self.hud is not None:
            self.hud.on_array_set(name, array.snapshot())

    def snapshot(self) -> Dict[str, object]:
        """Plain-Python view of all variables (ints and lists of ints)."""
        return {name: value.snapshot() for name, value in self._values.items()}

    def names(self) -> List[str]:
        return list(self._values)

    def clear(self) -> None:
        self._values.clear()
