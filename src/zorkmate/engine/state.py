"""Mutable per-session state.

One SessionState belongs to one SessionOrchestrator. Presentation code reads
it; only the orchestrator, the command multiplexer and the inferencer write
to it, through their own methods.
"""

from collections import deque
from dataclasses import dataclass, field

from .output import OutputLog
from .world import START_LOCATION


@dataclass(frozen=True)
class PendingInput:
    """The open input slot: the interpreter is blocked on one line of input."""

    max_length: int


@dataclass
class SessionState:
    log: OutputLog = field(default_factory=OutputLog)
    location: str = START_LOCATION

    # Carried items, in order of discovery, no duplicates
    inventory: list[str] = field(default_factory=list)

    # Commands from macros and routes, oldest first
    queue: deque[str] = field(default_factory=deque)

    # Set exactly while the interpreter waits and no command has been supplied
    pending: PendingInput | None = None

    @property
    def awaiting_input(self) -> bool:
        return self.pending is not None
