"""Automation and guide routes: macros, auto-travel, walkthrough checklist."""

from xitzin import Request, Xitzin
from xitzin.auth import get_identity, require_certificate

from ..app import get_session
from ..engine.macros import MACROS
from ..errors import UnknownMacroError
from ..progress import WalkthroughProgress, get_or_create_player
from .play import GAME_OVER, play_session, render_play


def _register_macro_routes(app: Xitzin) -> None:

    @app.gemini("/macros", name="macros")
    @require_certificate
    def macros(request: Request):
        return app.template("macros.gmi", macros=MACROS)

    @app.gemini("/macro/{macro_id}", name="macro")
    @require_certificate
    def run_macro(request: Request, macro_id: str):
        with play_session(request) as game:
            if game.is_finished:
                return render_play(app, game, message=GAME_OVER)
            try:
                game.run_macro(macro_id)
            except UnknownMacroError as exc:
                return render_play(app, game, message=str(exc))
            return render_play(app, game)


def _register_travel_routes(app: Xitzin) -> None:

    @app.gemini("/travel", name="travel")
    @require_certificate
    def travel(request: Request):
        world = request.app.state.world
        with play_session(request) as game:
            destinations = [
                (world.slug(name), name)
                for name in world.location_list()
                if name != game.location
            ]
            return app.template(
                "travel.gmi",
                location=game.location,
                destinations=destinations,
            )

    @app.gemini("/travel/{slug}", name="travel_to")
    @require_certificate
    def travel_to(request: Request, slug: str):
        world = request.app.state.world
        with play_session(request) as game:
            destination = world.by_slug(slug)
            if destination is None:
                return render_play(app, game, message=f"Unknown destination: {slug}")
            if game.is_finished:
                return render_play(app, game, message=GAME_OVER)
            game.navigate_to(destination)
            return render_play(app, game)


def _register_walkthrough_routes(app: Xitzin) -> None:

    def _render(request: Request, toggle: str | None = None):
        identity = get_identity(request)
        walkthrough = request.app.state.walkthrough
        with get_session(request.app) as db_session:
            player = get_or_create_player(db_session, identity.fingerprint)
            progress = WalkthroughProgress(db_session, player, walkthrough)
            message = ""
            if toggle is not None:
                try:
                    progress.toggle(toggle)
                except KeyError:
                    message = f"Unknown task: {toggle}"
            done = progress.completed()
        return app.template(
            "walkthrough.gmi",
            phases=walkthrough.phases,
            done=done,
            total=walkthrough.total_tasks(),
            message=message,
        )

    @app.gemini("/walkthrough", name="walkthrough")
    @require_certificate
    def walkthrough(request: Request):
        return _render(request)

    @app.gemini("/walkthrough/{task_id}", name="walkthrough_toggle")
    @require_certificate
    def toggle_task(request: Request, task_id: str):
        return _render(request, toggle=task_id)


def register_routes(app: Xitzin) -> None:
    """Register automation and guide routes."""
    _register_macro_routes(app)
    _register_travel_routes(app)
    _register_walkthrough_routes(app)
