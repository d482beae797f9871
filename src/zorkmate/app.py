"""Xitzin application factory for Zorkmate."""

from importlib import resources
from pathlib import Path

from sqlmodel import Session, SQLModel, create_engine
from xitzin import Xitzin

from .config import Config
from .engine.loader import load_walkthrough, load_world
from .logging import get_logger
from .session import InterpreterFactory, SessionRegistry, frotz_factory

logger = get_logger(__name__)


def _get_data_path(name: str) -> Path:
    """Locate a bundled data file (works when installed in a venv)."""
    return resources.files("zorkmate.data").joinpath(name)


def create_app(
    config: Config | None = None,
    interpreter_factory: InterpreterFactory | None = None,
) -> Xitzin:
    """Create and configure the Xitzin application."""
    config = config or Config.from_env()
    interpreter_factory = interpreter_factory or frotz_factory(config)

    templates_dir = Path(__file__).parent / "templates"

    app = Xitzin(
        title="Zorkmate",
        version="0.1.0",
        templates_dir=templates_dir,
    )

    engine = create_engine(config.database_url)
    app.state.engine = engine
    app.state.config = config

    @app.on_startup
    async def startup():
        """Initialize database and load the map and walkthrough."""
        SQLModel.metadata.create_all(engine)
        logger.debug("database_setup_complete")

        world = load_world(_get_data_path("zork1_map.json"))
        walkthrough = load_walkthrough(_get_data_path("walkthrough.json"))
        app.state.world = world
        app.state.walkthrough = walkthrough
        app.state.sessions = SessionRegistry(
            world,
            interpreter_factory,
            queue_delay=config.queue_delay,
        )
        logger.info(
            "world_loaded",
            locations=len(world.locations),
            tasks=walkthrough.total_tasks(),
        )
        logger.info("startup_complete")

    @app.on_shutdown
    async def shutdown():
        """Stop every running interpreter."""
        app.state.sessions.close_all()
        logger.info("shutdown_complete")

    from .routes import home, play, tools

    home.register_routes(app)
    play.register_routes(app)
    tools.register_routes(app)

    return app


def get_session(app: Xitzin) -> Session:
    """Get a database session from the app."""
    return Session(app.state.engine)
