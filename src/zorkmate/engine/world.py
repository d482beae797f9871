"""Immutable data structures for the Zork I world graph.

These are loaded once from zork1_map.json at startup and shared across all
sessions. Nothing here changes while a session is running.
"""

import re
from dataclasses import dataclass, field
from enum import StrEnum

START_LOCATION = "West of House"


class Direction(StrEnum):
    """Direction tag on a transition; doubles as the default command."""

    N = "n"
    S = "s"
    E = "e"
    W = "w"
    NE = "ne"
    NW = "nw"
    SE = "se"
    SW = "sw"
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    EXIT = "exit"
    CLIMB = "climb"
    JUMP = "jump"
    LAUNCH = "launch"


# Directions that have a cell on the compass mini-map
COMPASS_DIRECTIONS = (
    Direction.N,
    Direction.S,
    Direction.E,
    Direction.W,
    Direction.NE,
    Direction.NW,
    Direction.SE,
    Direction.SW,
    Direction.UP,
    Direction.DOWN,
)


@dataclass(frozen=True)
class Transition:
    """A directed edge: direction + optional literal command → target."""

    target: str
    direction: Direction
    command: str | None = None
    condition: str | None = None
    is_locked: bool = False

    @property
    def commands(self) -> list[str]:
        """Commands to send for this edge, multi-line commands split in order."""
        return (self.command or self.direction.value).split("\n")


@dataclass
class World:
    """The complete location graph, keyed by display name."""

    graph: dict[str, tuple[Transition, ...]] = field(default_factory=dict)
    start: str = START_LOCATION

    @property
    def locations(self) -> tuple[str, ...]:
        return tuple(self.graph)

    def __contains__(self, name: object) -> bool:
        return name in self.graph

    def transitions(self, name: str) -> tuple[Transition, ...]:
        return self.graph.get(name, ())

    def location_list(self) -> list[str]:
        """Location names in alphabetical order, for destination pickers."""
        return sorted(self.graph)

    @staticmethod
    def slug(name: str) -> str:
        return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")

    def by_slug(self, slug: str) -> str | None:
        for name in self.graph:
            if self.slug(name) == slug:
                return name
        return None
