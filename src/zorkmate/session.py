"""Session layer between the orchestrator and the front end.

PlaySession is everything presentation code may touch: read-only views of
the log and inferred state, plus the command, macro and travel entry points.
"""

import threading
import time
from collections.abc import Callable

from .config import Config
from .engine.interpreter import FrotzInterpreter, Interpreter
from .engine.macros import get_macro
from .engine.multiplexer import DEFAULT_QUEUE_DELAY
from .engine.orchestrator import SessionOrchestrator
from .engine.pathfinder import Neighbor, find_path, get_neighbors
from .engine.world import World
from .logging import get_logger

logger = get_logger(__name__)

InterpreterFactory = Callable[[], Interpreter]


class PlaySession:
    """One operator's live game, wrapping a SessionOrchestrator."""

    def __init__(self, orchestrator: SessionOrchestrator):
        self.orchestrator = orchestrator
        self.world = orchestrator.world
        self.state = orchestrator.state
        # Front-end requests may arrive on several threads
        self._lock = threading.RLock()

    @classmethod
    def start(
        cls,
        interpreter: Interpreter,
        world: World,
        queue_delay: float = DEFAULT_QUEUE_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> "PlaySession":
        orchestrator = SessionOrchestrator(
            interpreter, world, queue_delay=queue_delay, sleep=sleep
        )
        session = cls(orchestrator)
        with session._lock:
            orchestrator.start()
        return session

    @property
    def lines(self) -> list[str]:
        return self.state.log.lines

    def tail(self, n: int) -> list[str]:
        return self.state.log.tail(n)

    @property
    def location(self) -> str:
        return self.state.location

    @property
    def inventory(self) -> list[str]:
        return list(self.state.inventory)

    @property
    def is_waiting(self) -> bool:
        return self.state.awaiting_input

    @property
    def is_finished(self) -> bool:
        return self.orchestrator.is_halted

    def neighbors(self) -> dict[str, Neighbor]:
        return get_neighbors(self.world, self.state.location)

    def submit_command(self, text: str) -> bool:
        """Route a typed command to the game; False if it wasn't accepted."""
        command = text.strip()
        if not command:
            return False
        with self._lock:
            return self.orchestrator.commands.submit_human(command)

    def run_macro(self, macro_id: str) -> bool:
        """Queue a macro's commands; False once the game has ended."""
        macro = get_macro(macro_id)
        with self._lock:
            if self.is_finished:
                logger.debug("macro_ignored", macro_id=macro_id)
                return False
            logger.info(
                "macro_started", macro_id=macro_id, commands=len(macro.commands)
            )
            self.orchestrator.commands.enqueue(macro.commands)
            return True

    def navigate_to(self, destination: str) -> bool:
        """Queue the route from the inferred location; False if none exists."""
        with self._lock:
            if self.is_finished:
                logger.debug("route_ignored", destination=destination)
                return False
            start = self.state.location
            result = find_path(self.world, start, destination)
            if result is None:
                logger.info("route_not_found", start=start, destination=destination)
                self.state.log.add_lines(f"No path found from {start} to {destination}.")
                return False
            logger.info(
                "route_planned",
                start=start,
                destination=destination,
                hops=max(len(result.path) - 1, 0),
            )
            self.orchestrator.commands.enqueue(result.commands)
            return True

    def close(self) -> None:
        with self._lock:
            self.orchestrator.close()


class SessionRegistry:
    """Live PlaySessions keyed by operator fingerprint."""

    def __init__(
        self,
        world: World,
        interpreter_factory: InterpreterFactory,
        queue_delay: float = DEFAULT_QUEUE_DELAY,
    ):
        self.world = world
        self.interpreter_factory = interpreter_factory
        self.queue_delay = queue_delay
        self._sessions: dict[str, PlaySession] = {}
        self._lock = threading.Lock()
        # Per-operator locks so a slow interpreter start blocks only its owner
        self._starting: dict[str, threading.Lock] = {}

    def get(self, fingerprint: str) -> PlaySession:
        """Return the operator's session, starting one if needed."""
        with self._lock:
            session = self._sessions.get(fingerprint)
            if session is not None:
                return session
            start_lock = self._starting.setdefault(fingerprint, threading.Lock())

        with start_lock:
            with self._lock:
                session = self._sessions.get(fingerprint)
            if session is not None:
                return session

            session = PlaySession.start(
                self.interpreter_factory(),
                self.world,
                queue_delay=self.queue_delay,
            )
            with self._lock:
                self._sessions[fingerprint] = session
            logger.info("session_started", fingerprint=fingerprint)
            return session

    def restart(self, fingerprint: str) -> PlaySession:
        self.discard(fingerprint)
        return self.get(fingerprint)

    def discard(self, fingerprint: str) -> None:
        with self._lock:
            session = self._sessions.pop(fingerprint, None)
        if session is not None:
            session.close()
            logger.info("session_closed", fingerprint=fingerprint)

    def close_all(self) -> None:
        with self._lock:
            fingerprints = list(self._sessions)
        for fingerprint in fingerprints:
            self.discard(fingerprint)
        logger.info("sessions_closed", count=len(fingerprints))

    def __len__(self) -> int:
        return len(self._sessions)


def frotz_factory(config: Config) -> InterpreterFactory:
    """Interpreter factory for the configured dfrotz + story file."""

    def factory() -> Interpreter:
        return FrotzInterpreter(
            story_file=config.story_file,
            command=config.interpreter_command,
            args=config.interpreter_args,
            max_length=config.max_input_length,
        )

    return factory
