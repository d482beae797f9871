"""Chooses the next line of input for the interpreter.

Queued commands (macros, travel routes) always go first. Only when the
queue is empty does the input slot open and wait for a human command; that
open slot is the one place a session ever suspends.
"""

import threading
import time
from collections.abc import Callable, Iterable

from ..logging import get_logger
from .state import PendingInput, SessionState

logger = get_logger(__name__)

# Pause before each queued command so automated play stays readable
DEFAULT_QUEUE_DELAY = 0.25


class CommandMultiplexer:
    """Feeds the interpreter from the command queue or a human submission.

    `deliver` is called with a newline-terminated command whenever a command
    resolves an open slot outside of request(); the orchestrator uses it to
    resume the interpreter.
    """

    def __init__(
        self,
        state: SessionState,
        deliver: Callable[[str], None],
        queue_delay: float = DEFAULT_QUEUE_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.state = state
        self.deliver = deliver
        self.queue_delay = queue_delay
        self._sleep = sleep
        self._slot_lock = threading.Lock()

    def request(self, max_length: int) -> str | None:
        """Serve a queued command, or open the slot and return None."""
        if self.state.queue:
            if self.queue_delay > 0:
                self._sleep(self.queue_delay)
            command = self.state.queue.popleft()
            self._echo(command)
            return command[:max_length] + "\n"

        with self._slot_lock:
            self.state.pending = PendingInput(max_length=max_length)
        return None

    def submit_human(self, command: str) -> bool:
        """Resolve the open slot with a typed command; no-op if none is open."""
        if self._take_slot() is None:
            logger.debug("stray_input_ignored", command=command)
            return False

        self._echo(command)
        self.deliver(command + "\n")
        return True

    def enqueue(self, commands: Iterable[str]) -> None:
        """Queue commands; if the game is already waiting, start right away."""
        commands = list(commands)
        if not commands:
            return
        self.state.queue.extend(commands)
        logger.debug("commands_enqueued", count=len(commands))

        slot = self._take_slot()
        if slot is None:
            return
        command = self.state.queue.popleft()
        self._echo(command)
        self.deliver(command[: slot.max_length] + "\n")

    def clear(self) -> None:
        self.state.queue.clear()

    def _take_slot(self) -> PendingInput | None:
        # Only one caller may resolve a given slot
        with self._slot_lock:
            slot, self.state.pending = self.state.pending, None
        return slot

    def _echo(self, command: str) -> None:
        self.state.log.add_lines(f"> {command}", "")
