"""Shared test fixtures for Zorkmate."""

from collections import deque
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from zorkmate.app import _get_data_path, create_app
from zorkmate.config import Config
from zorkmate.engine.interpreter import GameOver, InputRequest, OutputEvent
from zorkmate.engine.loader import load_walkthrough, load_world
from zorkmate.engine.walkthrough import Walkthrough
from zorkmate.engine.world import World
from zorkmate.errors import InterpreterError
from zorkmate.models import Player

INTRO = (
    "ZORK I: The Great Underground Empire\n"
    "Copyright (c) 1981, 1982, 1983 Infocom, Inc. All rights reserved.\n"
    "\n"
    "West of House\n"
    "You are standing in an open field west of a white house, "
    "with a boarded front door.\n"
    "There is a small mailbox here.\n"
)

# Replies keyed by command, close enough to Zork I for the inference rules
ZORK_REPLIES = {
    "n": "North of House\nYou are facing the north side of a white house.\n",
    "s": "South of House\nYou are facing the south side of a white house.\n",
    "e": "Behind House\nYou are behind the white house.\n",
    "w": "Forest\nThis is a forest, with trees in all directions.\n",
    "open window": "With great effort, you open the window far enough to allow entry.\n",
    "enter": "Kitchen\nYou are in the kitchen of the white house.\n",
    "look": "West of House\nYou are standing in an open field west of a white house.\n",
    "take lamp": "Taken.\n",
    "inventory": "You are carrying:\n  A brass lantern\n  An elvish sword\n",
}


class ScriptedInterpreter:
    """In-memory stand-in for dfrotz that answers commands from a table.

    A reply may be a string (output, then another input request), a list of
    events (followed by an input request unless it ends the game), or an
    exception instance that step() will raise.
    """

    def __init__(
        self,
        replies: dict | None = None,
        intro: str = INTRO,
        max_length: int = 80,
        fail_start: bool = False,
    ):
        self.replies = dict(ZORK_REPLIES if replies is None else replies)
        self.intro = intro
        self.max_length = max_length
        self.fail_start = fail_start
        self.events: deque = deque()
        self.received: list[str] = []
        self.steps = 0
        self.closed = False

    def start(self) -> None:
        if self.fail_start:
            raise InterpreterError("story file not found: zork1.z3")
        self.events.extend([OutputEvent(self.intro), InputRequest(self.max_length)])

    def step(self):
        self.steps += 1
        event = self.events.popleft()
        if isinstance(event, Exception):
            raise event
        return event

    def resume(self, text: str) -> None:
        self.received.append(text)
        command = text.rstrip("\n")
        if command == "quit":
            self.events.extend([OutputEvent("Your score is 0.\n"), GameOver()])
            return

        reply = self.replies.get(command, "I don't know how to do that.\n")
        if isinstance(reply, Exception):
            self.events.append(reply)
        elif isinstance(reply, list):
            self.events.extend(reply)
            if not any(isinstance(e, GameOver) for e in reply):
                self.events.append(InputRequest(self.max_length))
        else:
            self.events.extend([OutputEvent(reply), InputRequest(self.max_length)])

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def scripted():
    return ScriptedInterpreter


@pytest.fixture
def world() -> World:
    return load_world(_get_data_path("zork1_map.json"))


@pytest.fixture
def walkthrough() -> Walkthrough:
    return load_walkthrough(_get_data_path("walkthrough.json"))


@pytest.fixture
def db_engine(tmp_path: Path):
    db_url = f"sqlite:///{tmp_path}/test.db"
    engine = create_engine(db_url)
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(db_engine):
    with Session(db_engine) as session:
        yield session


@pytest.fixture
def test_player(db_session: Session) -> Player:
    player = Player(fingerprint="test-fingerprint-abc123")
    db_session.add(player)
    db_session.commit()
    db_session.refresh(player)
    return player


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    return Config(database_url=f"sqlite:///{tmp_path}/test.db", queue_delay=0.0)


@pytest.fixture
def app(test_config: Config):
    return create_app(test_config, interpreter_factory=ScriptedInterpreter)


@pytest.fixture
def client(app):
    from xitzin.testing import test_app

    with test_app(app) as client:
        yield client


@pytest.fixture
def auth_client(client):
    return client.with_certificate("test-fingerprint-abc123")
