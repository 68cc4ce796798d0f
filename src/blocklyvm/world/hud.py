"""
HUD notifier boundary.

The game shows every variable of the running program in a small overlay. The
interpreter reports writes here on a best-effort basis; whether a HUD is
attached never changes what a program does.
"""

from typing import Dict, List, Tuple


class HudNotifier:
    """Base notifier; every hook is a no-op."""

    def on_scalar_set(self, name: str, value: int) -> None:
        pass

    def on_array_set(self, name: str, values: List[int]) -> None:
        pass

    def clear(self) -> None:
        pass


class RecordingHud(HudNotifier):
    """Keeps the latest value of every variable plus the raw event log."""

    def __init__(self):
        self.scalars: Dict[str, int] = {}
        self.arrays: Dict[str, List[int]] = {}
        self.events: List[Tuple[str, str, object]] = []
        self.clear_count = 0

    def on_scalar_set(self, name: str, value: int) -> None:
        self.scalars[name] = value
        self.events.append(("scalar", name, value))

    def on_array_set(self, name: str, values: List[int]) -> None:
        self.arrays[name] = list(values)
        self.events.append(("array", name, list(values)))

    def clear(self) -> None:
        self.scalars.clear()
        self.arrays.clear()
        self.clear_count += 1
