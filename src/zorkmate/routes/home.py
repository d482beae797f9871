"""Landing, help, and about pages."""

from xitzin import Request, Xitzin

from ..engine.macros import MACROS
from ..engine.world import COMPASS_DIRECTIONS


def register_routes(app: Xitzin) -> None:
    """Register static page routes."""

    @app.gemini("/", name="home")
    def home(request: Request):
        world = request.app.state.world
        return app.template(
            "home.gmi",
            location_count=len(world.locations),
            start=world.start,
        )

    @app.gemini("/help", name="help")
    def help_page(request: Request):
        return app.template(
            "help.gmi",
            directions=[d.value for d in COMPASS_DIRECTIONS],
            macros=MACROS,
        )

    @app.gemini("/about", name="about")
    def about(request: Request):
        return app.template("about.gmi")
