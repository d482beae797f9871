"""Hard-coded command macros for common Zork I openings."""

from dataclasses import dataclass

from ..errors import UnknownMacroError


@dataclass(frozen=True)
class Macro:
    title: str
    commands: tuple[str, ...]


MACROS: dict[str, Macro] = {
    "start_forest": Macro(
        "Start -> Forest",
        ("n", "n"),
    ),
    "enter_house": Macro(
        "Enter House",
        ("n", "e", "open window", "enter"),
    ),
    "get_lantern": Macro(
        "Get Essentials",
        ("w", "take lamp", "take sword"),
    ),
    "open_trapdoor": Macro(
        "Open Trapdoor",
        ("move rug", "open trap door"),
    ),
    "get_egg": Macro(
        "Get Egg",
        ("n", "n", "climb tree", "take egg", "down"),
    ),
    # From the Living Room, trap door already open
    "dam_route": Macro(
        "Go to Dam",
        ("turn on lamp", "d", "n", "e", "e", "n", "e"),
    ),
}


def get_macro(macro_id: str) -> Macro:
    try:
        return MACROS[macro_id]
    except KeyError:
        raise UnknownMacroError(macro_id) from None
