"""Gameplay routes: the terminal, compass, and control pad."""

from contextlib import contextmanager

from xitzin import Redirect, Request, Xitzin
from xitzin.auth import get_identity, require_certificate

from ..app import get_session
from ..engine.world import Direction
from ..progress import get_or_create_player
from ..session import PlaySession

NOT_WAITING = "The game isn't waiting for a command right now."
GAME_OVER = "The game is over. Start a new one to keep playing."

# Compass rows for the mini-map, top to bottom
_COMPASS_ROWS = (("nw", "n", "ne"), ("w", None, "e"), ("sw", "s", "se"))

# Control-pad actions: link slug -> game command
ACTIONS = {
    "wait": "wait",
    "take-all": "take all",
    "drop-all": "drop all",
    "save": "save",
    "restore": "restore",
}

PREFORMAT_TOGGLE = "```"


@contextmanager
def play_session(request: Request):
    """Yield the operator's live session, recording the visit."""
    identity = get_identity(request)
    with get_session(request.app) as db_session:
        get_or_create_player(db_session, identity.fingerprint)
    yield request.app.state.sessions.get(identity.fingerprint)


def _compass(game: PlaySession) -> list[list[dict]]:
    neighbors = game.neighbors()
    rows = []
    for row in _COMPASS_ROWS:
        cells = []
        for direction in row:
            neighbor = neighbors.get(direction) if direction else None
            cells.append({"direction": direction, "neighbor": neighbor})
        rows.append(cells)
    return rows


def _preformatted(line: str) -> str:
    # A line opening with the toggle would end the log block early
    if line.startswith(PREFORMAT_TOGGLE):
        return " " + line
    return line


def render_play(app: Xitzin, game: PlaySession, message: str = ""):
    """Render the main play view."""
    neighbors = game.neighbors()
    return app.template(
        "play.gmi",
        lines=[_preformatted(line) for line in game.tail(app.state.config.log_tail)],
        actions=ACTIONS,
        location=game.location,
        inventory=game.inventory,
        compass=_compass(game),
        up=neighbors.get(Direction.UP.value),
        down=neighbors.get(Direction.DOWN.value),
        message=message,
        is_finished=game.is_finished,
        is_waiting=game.is_waiting,
    )


def _submit(app: Xitzin, game: PlaySession, command: str):
    if game.is_finished:
        return render_play(app, game, message=GAME_OVER)
    if not game.submit_command(command):
        return render_play(app, game, message=NOT_WAITING)
    return render_play(app, game)


def _register_action_routes(app: Xitzin) -> None:
    """Register command and movement routes."""

    @app.gemini("/play", name="play")
    @require_certificate
    def play(request: Request):
        """Main game view."""
        with play_session(request) as game:
            return render_play(app, game)

    @app.gemini("/go/{direction}", name="go")
    @require_certificate
    def go(request: Request, direction: str):
        """Movement via a compass link."""
        with play_session(request) as game:
            if direction not in {d.value for d in Direction}:
                return render_play(app, game, message=f"Unknown direction: {direction}")
            return _submit(app, game, direction)

    @app.input("/cmd", prompt="What do you want to do?", name="cmd")
    @require_certificate
    def cmd(request: Request, query: str):
        """Freeform command entry."""
        with play_session(request) as game:
            return _submit(app, game, query)

    @app.gemini("/look", name="look")
    @require_certificate
    def look(request: Request):
        with play_session(request) as game:
            return _submit(app, game, "look")

    @app.gemini("/inventory", name="inventory")
    @require_certificate
    def inventory(request: Request):
        with play_session(request) as game:
            return _submit(app, game, "inventory")

    @app.gemini("/do/{action}", name="do")
    @require_certificate
    def do(request: Request, action: str):
        """One of the fixed control-pad actions."""
        with play_session(request) as game:
            command = ACTIONS.get(action)
            if command is None:
                return render_play(app, game, message=f"Unknown action: {action}")
            return _submit(app, game, command)

    @app.gemini("/examine/{item}", name="examine")
    @require_certificate
    def examine(request: Request, item: str):
        """Examine something the session believes is carried."""
        with play_session(request) as game:
            if item not in game.inventory:
                return render_play(
                    app, game, message=f"You don't seem to be carrying: {item}"
                )
            return _submit(app, game, f"examine {item}")


def _register_session_routes(app: Xitzin) -> None:
    """Register game restart."""

    @app.input(
        "/new",
        prompt="Are you sure you want to start over? Type YES to confirm:",
        name="new_game",
    )
    @require_certificate
    def new_game(request: Request, query: str):
        """Restart the interpreter with confirmation."""
        if query.strip().upper() != "YES":
            return Redirect("/play")
        identity = get_identity(request)
        game = request.app.state.sessions.restart(identity.fingerprint)
        return render_play(app, game, message="A new adventure begins!")


def register_routes(app: Xitzin) -> None:
    """Register gameplay routes."""
    _register_action_routes(app)
    _register_session_routes(app)
