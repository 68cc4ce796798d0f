"""
Program Session

Request-level behaviour of the game's control endpoints, without the HTTP
layer:

- ``start(text)``  run a submitted program, answer with status and body
- ``reset()``      stop the running program, put the hero back to the start
- ``clear()``      forget all program state before the next run

After an interrupted or failed run all state is cleared automatically. HUD
clearing is deferred to the next ``start`` so the player can still read the
variables of the run that just ended.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from ..shared.errors import ProgramAlreadyRunning
from ..utils.config import (
    RESPONSE_ACTION_PREFIX, RESPONSE_INTERRUPTED, RESPONSE_MESSAGE_PREFIX, RESPONSE_OK,
    STATUS_FAILED, STATUS_INTERRUPTED, STATUS_OK,
)
from ..utils.io_utils import split_program
from .runtime import Interpreter, Outcome

logger = logging.getLogger("blocklyvm.runtime.session")


@dataclass(frozen=True)
class Response:
    status: int
    body: str
    outcome: Optional[Outcome] = None


class ProgramSession:
    def __init__(self, interpreter: Interpreter):
        self.interpreter = interpreter
        self._running = threading.Lock()
        self._clear_hud = False

    @property
    def running(self) -> bool:
        return self._running.locked()

    def start(self, text: str) -> Response:
        if not self._running.acquire(blocking=False):
            raise ProgramAlreadyRunning()
        try:
            if self._clear_hud:
                self._clear_hud_values()
                self._clear_hud = False
            outcome = self.interpreter.run(split_program(text))
        finally:
            self._running.release()

        if outcome.is_failed:
            body = f"{RESPONSE_ACTION_PREFIX}{outcome.last_action}\n{RESPONSE_MESSAGE_PREFIX}{outcome.message}"
            self.clear()
            return Response(STATUS_FAILED, body, outcome)
        if outcome.is_interrupted:
            self.clear()
            return Response(STATUS_INTERRUPTED, RESPONSE_INTERRUPTED, outcome)
        return Response(STATUS_OK, RESPONSE_OK, outcome)

    def reset(self) -> str:
        """Interrupt the running program and teleport the hero to the start."""
        self.interpreter.interrupt()
        self.interpreter.world.teleport_to_start()
        if not self.running:
            # idle: the next start must not see the interrupt
            self.clear()
        return self._position()

    def clear(self) -> str:
        """Clear all program state; the HUD is cleared on the next start."""
        self.interpreter.reset_all()
        self._clear_hud = True
        return self._position()

    def _clear_hud_values(self) -> None:
        hud = self.interpreter.hud
        if hud is None:
            return
        hud.clear()

    def _position(self) -> str:
        x, y = self.interpreter.world.hero_position()
        return f"{x},{y}"
