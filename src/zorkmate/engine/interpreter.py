"""Boundary to the external story interpreter.

The interpreter is an opaque process stepped one event at a time. It either
produces output, asks for a line of input, reports a status line, or ends.
FrotzInterpreter drives dfrotz (the dumb-terminal Frotz build) over a pty.
"""

import re
import shlex
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import pexpect

from ..errors import InterpreterError
from ..logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_INPUT_LENGTH = 120


@dataclass(frozen=True)
class OutputEvent:
    text: str


@dataclass(frozen=True)
class InputRequest:
    max_length: int


@dataclass(frozen=True)
class StatusEvent:
    text: str
    score: int = 0
    moves: int = 0


@dataclass(frozen=True)
class GameOver:
    pass


Event = OutputEvent | InputRequest | StatusEvent | GameOver


class Interpreter(Protocol):
    """What the session layer needs from a story interpreter."""

    def start(self) -> None:
        """Load the story. Raise InterpreterError if that fails."""
        ...

    def step(self) -> Event:
        """Run until the next event and return it."""
        ...

    def resume(self, text: str) -> None:
        """Answer the pending InputRequest with a newline-terminated line."""
        ...

    def close(self) -> None:
        ...


# dfrotz prints the status window as one line, e.g.
# " West of House                                Score: 0        Moves: 1"
_STATUS_LINE = re.compile(
    r"^[ \t]*(?P<room>\S.*?)[ \t]{2,}Score:[ \t]*(?P<score>-?\d+)"
    r"[ \t]+Moves:[ \t]*(?P<moves>\d+)[ \t]*$\n?",
    re.MULTILINE,
)
_PROMPT = r"\n>\s?"


class FrotzInterpreter:
    """Runs a story file under dfrotz via pexpect."""

    def __init__(
        self,
        story_file: Path,
        command: str = "dfrotz",
        args: str = "-m -p",
        max_length: int = DEFAULT_MAX_INPUT_LENGTH,
        timeout: float = 10.0,
    ):
        self.story_file = Path(story_file)
        self.command = command
        self.args = shlex.split(args)
        self.max_length = max_length
        self.timeout = timeout
        self._child: pexpect.spawn | None = None
        self._events: deque[Event] = deque()
        self._awaiting_input = False

    def start(self) -> None:
        if not self.story_file.is_file():
            raise InterpreterError(f"story file not found: {self.story_file}")
        try:
            self._child = pexpect.spawn(
                self.command,
                [*self.args, str(self.story_file)],
                encoding="utf-8",
                timeout=self.timeout,
                echo=False,
            )
        except pexpect.ExceptionPexpect as exc:
            raise InterpreterError(f"could not start {self.command}: {exc}") from exc
        logger.info(
            "interpreter_started",
            command=self.command,
            story_file=str(self.story_file),
        )

    def step(self) -> Event:
        if self._events:
            return self._events.popleft()
        if self._child is None:
            raise InterpreterError("interpreter was not started")
        if self._awaiting_input:
            raise InterpreterError("step() called while input is pending")

        try:
            index = self._child.expect([_PROMPT, pexpect.EOF])
        except pexpect.TIMEOUT as exc:
            raise InterpreterError("interpreter stopped responding") from exc

        self._queue_output(self._child.before or "")
        if index == 0:
            self._events.append(InputRequest(self.max_length))
            self._awaiting_input = True
        else:
            self._events.append(GameOver())
        return self._events.popleft()

    def resume(self, text: str) -> None:
        if self._child is None or not self._awaiting_input:
            raise InterpreterError("resume() without a pending input request")
        line = text.rstrip("\n")[: self.max_length]
        self._awaiting_input = False
        try:
            self._child.send(line + "\n")
        except OSError as exc:
            raise InterpreterError(f"could not send input: {exc}") from exc

    def close(self) -> None:
        if self._child is not None:
            self._child.close(force=True)
            self._child = None

    def _queue_output(self, raw: str) -> None:
        text = raw.replace("\r", "")
        for match in _STATUS_LINE.finditer(text):
            self._events.append(
                StatusEvent(
                    text=match.group(0).strip(),
                    score=int(match.group("score")),
                    moves=int(match.group("moves")),
                )
            )
        text = _STATUS_LINE.sub("", text)
        if text.strip():
            self._events.append(OutputEvent(text.lstrip("\n") + "\n"))
