"""Parse the bundled JSON data files into World and Walkthrough objects.

zork1_map.json maps each location name to a list of edges:
    {"to": <name>, "dir": <tag>, "command": <str>, "condition": <str>, "locked": <bool>}
Only "to" and "dir" are required. "command" may hold several newline-joined
commands; it overrides the direction tag as the text sent to the game.

walkthrough.json is a list of phases, each with a list of tasks.
"""

import json
from pathlib import Path
from typing import Any

from ..errors import WorldDataError
from .walkthrough import Phase, Task, Walkthrough
from .world import START_LOCATION, Direction, Transition, World


def _parse_direction(location: str, raw: Any) -> Direction:
    try:
        return Direction(raw)
    except ValueError:
        raise WorldDataError(
            f"{location!r} has an edge with unknown direction {raw!r}"
        ) from None


def _parse_edge(location: str, raw: dict[str, Any]) -> Transition:
    if "to" not in raw or "dir" not in raw:
        raise WorldDataError(f"{location!r} has an edge missing 'to' or 'dir'")
    return Transition(
        target=raw["to"],
        direction=_parse_direction(location, raw["dir"]),
        command=raw.get("command") or None,
        condition=raw.get("condition"),
        is_locked=bool(raw.get("locked", False)),
    )


def _check_targets(graph: dict[str, tuple[Transition, ...]]) -> None:
    """Every edge must land on a location defined in the same graph."""
    for name, edges in graph.items():
        for edge in edges:
            if edge.target not in graph:
                raise WorldDataError(
                    f"{name!r} --{edge.direction.value}--> {edge.target!r}: "
                    "target is not a known location"
                )


def build_world(raw: dict[str, list[dict[str, Any]]], start: str = START_LOCATION) -> World:
    """Build a validated World from an already-decoded adjacency mapping."""
    graph = {
        name: tuple(_parse_edge(name, edge) for edge in edges)
        for name, edges in raw.items()
    }
    _check_targets(graph)
    if start not in graph:
        raise WorldDataError(f"start location {start!r} is not in the map")
    return World(graph=graph, start=start)


def load_world(path: Path) -> World:
    """Load and validate the world graph from a JSON map file."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise WorldDataError(f"{path}: expected an object of locations")
    return build_world(raw)


def _parse_phase(raw: dict[str, Any]) -> Phase:
    tasks = tuple(
        Task(id=t["id"], text=t["text"], hint=t.get("hint"))
        for t in raw.get("tasks", [])
    )
    return Phase(
        id=raw["id"],
        title=raw["title"],
        description=raw.get("description", ""),
        tasks=tasks,
    )


def load_walkthrough(path: Path) -> Walkthrough:
    """Load walkthrough phases; task ids must be unique across phases."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)

    try:
        walkthrough = Walkthrough(phases=[_parse_phase(p) for p in raw])
    except KeyError as exc:
        raise WorldDataError(f"{path}: walkthrough entry missing {exc}") from None

    ids = walkthrough.task_ids()
    if len(ids) != len(set(ids)):
        raise WorldDataError(f"{path}: duplicate walkthrough task ids")
    return walkthrough
