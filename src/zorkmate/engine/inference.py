"""Best-effort location and inventory inference from the game's text.

The interpreter's object model isn't reachable from here, so everything is
pattern matching on narrative output. A wrong guess is never an error: it
stays until a later match overwrites it.
"""

import re

from ..logging import get_logger
from .state import SessionState
from .world import World

logger = get_logger(__name__)

# Scanned in this order; the first name found in a chunk wins
FALLBACK_LOCATIONS = (
    "West of House",
    "North of House",
    "South of House",
    "Behind House",
    "Kitchen",
    "Living Room",
    "Attic",
    "Forest",
    "Canyon View",
    "Clearing",
    "Canyon Bottom",
    "End of Rainbow",
    "Chimney",
    "Studio",
    "Gallery",
    "Mailbox",
)

TAKEN_MARKER = "Taken."
CARRYING_MARKER = "You are carrying:"
EMPTY_HANDED_MARKER = "You are empty-handed."

# Trailing log lines searched for the triggering command or listing
TAKE_WINDOW = 6
INVENTORY_WINDOW = 30

# "take all" names no single item
TAKE_ALL_WORDS = frozenset({"all", "everything"})

_STATUS_SPLIT = re.compile(r"\s{2,}")
_TAKE_COMMAND = re.compile(r"^>\s*take\s+(\w+)", re.IGNORECASE)
_ARTICLE_ITEM = re.compile(r"^an?\s+(.+)$", re.IGNORECASE)
_PARENTHETICAL = re.compile(r"\s*\(.*\)\s*$")


def _head_noun(description: str) -> str | None:
    """'A brass lantern (providing light)' -> 'lantern'."""
    match = _ARTICLE_ITEM.match(description.strip())
    if not match:
        return None
    words = _PARENTHETICAL.sub("", match.group(1)).split()
    if not words:
        return None
    return words[-1].strip(".,;:!?").lower() or None


class StateInferencer:
    """Updates SessionState.location and .inventory from output text."""

    def __init__(self, world: World, state: SessionState):
        self.world = world
        self.state = state
        # Once a status line matched, narrative scanning is no longer trusted
        self.has_status_line = False

    def observe_status(self, text: str) -> None:
        """Status line: first run-of-spaces segment is the location name."""
        name = _STATUS_SPLIT.split(text.strip(), maxsplit=1)[0]
        if name in self.world:
            self.has_status_line = True
            self._set_location(name, source="status")

    def observe(self, text: str) -> None:
        """Run every heuristic on a freshly appended output chunk."""
        if not self.has_status_line:
            self._scan_location(text)
        if TAKEN_MARKER in text:
            self._scan_taken()
        if CARRYING_MARKER in text:
            self._scan_listing()
        elif EMPTY_HANDED_MARKER in text:
            self._replace_inventory([])

    def _set_location(self, name: str, source: str) -> None:
        if name != self.state.location:
            logger.debug("location_inferred", location=name, source=source)
            self.state.location = name

    def _scan_location(self, text: str) -> None:
        for name in FALLBACK_LOCATIONS:
            if name in text:
                self._set_location(name, source="narrative")
                return

    def _scan_taken(self) -> None:
        for line in reversed(self.state.log.tail(TAKE_WINDOW)):
            match = _TAKE_COMMAND.match(line)
            if match:
                item = match.group(1)
                if item.lower() not in TAKE_ALL_WORDS:
                    self._add_item(item)
                return

    def _scan_listing(self) -> None:
        window = self.state.log.tail(INVENTORY_WINDOW)
        start = max(
            (i for i, line in enumerate(window) if CARRYING_MARKER in line),
            default=None,
        )
        if start is None:
            return

        items: list[str] = []
        for line in window[start + 1 :]:
            if line.startswith(">"):
                break
            if not line.strip():
                continue
            noun = _head_noun(line)
            if noun and noun not in items:
                items.append(noun)
        self._replace_inventory(items)

    def _add_item(self, item: str) -> None:
        if item not in self.state.inventory:
            self.state.inventory.append(item)
            logger.debug("item_taken", item=item)

    def _replace_inventory(self, items: list[str]) -> None:
        self.state.inventory[:] = items
        logger.debug("inventory_listed", items=items)
