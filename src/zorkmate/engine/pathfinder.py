"""Shortest routes over the world graph.

find_path() is a plain breadth-first search. Every edge is one hop, even
when its command expands to several lines ("open window" then "enter"), so
the result is shortest in edges, not in commands sent. Gating metadata is
carried for display only; the search walks locked edges like any other.
"""

from collections import deque
from dataclasses import dataclass, field

from .world import COMPASS_DIRECTIONS, World


@dataclass
class PathResult:
    path: list[str] = field(default_factory=list)
    commands: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Neighbor:
    name: str
    condition: str | None = None
    is_locked: bool = False


def find_path(world: World, start: str, end: str) -> PathResult | None:
    """Return the route from start to end, or None if there isn't one."""
    if start == end:
        return PathResult()
    if start not in world or end not in world:
        return None

    queue = deque([(start, [start], [])])
    visited = {start}

    while queue:
        node, path, commands = queue.popleft()
        if node == end:
            return PathResult(path=path, commands=commands)

        for edge in world.transitions(node):
            if edge.target in visited:
                continue
            visited.add(edge.target)
            queue.append((edge.target, path + [edge.target], commands + edge.commands))

    return None


def get_neighbors(world: World, location: str) -> dict[str, Neighbor]:
    """Adjacent locations by compass/vertical direction, for the mini-map.

    When two edges share a direction the later one wins.
    """
    neighbors: dict[str, Neighbor] = {}
    for edge in world.transitions(location):
        if edge.direction in COMPASS_DIRECTIONS:
            neighbors[edge.direction.value] = Neighbor(
                name=edge.target,
                condition=edge.condition,
                is_locked=edge.is_locked,
            )
    return neighbors
