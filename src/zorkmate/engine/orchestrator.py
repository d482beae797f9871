"""Drives the interpreter turn by turn.

The orchestrator is a small state machine:

    RUNNING --input requested, nothing queued--> AWAITING_INPUT
    AWAITING_INPUT --command delivered--> RUNNING
    any --game over / interpreter failure--> HALTED

run() is the scheduler loop. It steps the interpreter until the session
either suspends on the input slot or halts, then returns to the caller.
Delivering a command (human or queued) re-enters run(). There is only ever
one advance() in flight, so the output log follows true turn order.
"""

import time
from collections.abc import Callable
from enum import StrEnum

from ..errors import InterpreterError
from ..logging import get_logger
from .inference import StateInferencer
from .interpreter import GameOver, InputRequest, Interpreter, OutputEvent, StatusEvent
from .multiplexer import DEFAULT_QUEUE_DELAY, CommandMultiplexer
from .state import SessionState
from .world import World

logger = get_logger(__name__)

LOAD_ERROR_LINE = "Error loading game file."


class Phase(StrEnum):
    RUNNING = "running"
    AWAITING_INPUT = "awaiting_input"
    HALTED = "halted"


class SessionOrchestrator:
    """Owns the SessionState and the interpreter for one play session."""

    def __init__(
        self,
        interpreter: Interpreter,
        world: World,
        queue_delay: float = DEFAULT_QUEUE_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.interpreter = interpreter
        self.world = world
        self.state = SessionState(location=world.start)
        self.inferencer = StateInferencer(world, self.state)
        self.commands = CommandMultiplexer(
            self.state,
            deliver=self._deliver,
            queue_delay=queue_delay,
            sleep=sleep,
        )
        self.phase = Phase.RUNNING
        self._started = False

    @property
    def is_halted(self) -> bool:
        return self.phase is Phase.HALTED

    def start(self) -> None:
        """Load the story and run until the first input request."""
        if self._started:
            return
        self._started = True
        try:
            self.interpreter.start()
        except InterpreterError as exc:
            logger.error("interpreter_load_failed", error=str(exc))
            self.state.log.add_lines(LOAD_ERROR_LINE)
            self.phase = Phase.HALTED
            return
        self.run()

    def run(self) -> None:
        while self.phase is Phase.RUNNING:
            self.advance()

    def advance(self) -> None:
        """Perform one interpreter step and route the resulting event."""
        try:
            event = self.interpreter.step()
        except Exception:
            logger.exception("interpreter_step_failed")
            self._halt("step_failed")
            return

        match event:
            case GameOver():
                self._halt("game_over")
            case OutputEvent(text=text):
                self.state.log.append(text)
                self.inferencer.observe(text)
            case StatusEvent(text=text):
                self.inferencer.observe_status(text)
            case InputRequest(max_length=max_length):
                command = self.commands.request(max_length)
                if command is None:
                    self.phase = Phase.AWAITING_INPUT
                else:
                    self._resume(command)
            case _:
                logger.error("interpreter_unknown_event", event=repr(event))
                self._halt("unknown_event")

    def close(self) -> None:
        if self.phase is not Phase.HALTED:
            self._halt("closed")
        else:
            self.interpreter.close()

    def _deliver(self, command: str) -> None:
        """Resume a suspended session with a command from the multiplexer."""
        if self.phase is not Phase.AWAITING_INPUT:
            return
        self.phase = Phase.RUNNING
        self._resume(command)
        self.run()

    def _resume(self, command: str) -> None:
        try:
            self.interpreter.resume(command)
        except Exception:
            logger.exception("interpreter_resume_failed", command=command.rstrip("\n"))
            self._halt("resume_failed")

    def _halt(self, reason: str) -> None:
        self.phase = Phase.HALTED
        self.state.pending = None
        self.state.queue.clear()
        # Frees the interpreter process; the log stays readable
        self.interpreter.close()
        logger.info("session_halted", reason=reason)
