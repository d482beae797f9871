"""Configuration for Zorkmate."""

import os
from dataclasses import dataclass
from pathlib import Path


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes")


@dataclass
class Config:
    """Application configuration."""

    database_url: str = "sqlite:///./zorkmate.db"
    host: str = "localhost"
    port: int = 1965
    certfile: Path | None = None
    keyfile: Path | None = None
    log_level: str = "INFO"
    log_file: Path | None = None
    json_logs: bool = False
    hash_fingerprints: bool = True

    # Interpreter
    story_file: Path = Path("zork1.z3")
    interpreter_command: str = "dfrotz"
    interpreter_args: str = "-m -p"
    max_input_length: int = 120

    # Seconds between queued macro/route commands
    queue_delay: float = 0.25
    # Output lines shown on the play page
    log_tail: int = 40

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from ZORKMATE_* environment variables."""
        certfile = os.getenv("ZORKMATE_CERTFILE")
        keyfile = os.getenv("ZORKMATE_KEYFILE")
        log_file = os.getenv("ZORKMATE_LOG_FILE")

        return cls(
            database_url=os.getenv("ZORKMATE_DATABASE_URL", cls.database_url),
            host=os.getenv("ZORKMATE_HOST", cls.host),
            port=int(os.getenv("ZORKMATE_PORT", str(cls.port))),
            certfile=Path(certfile) if certfile else None,
            keyfile=Path(keyfile) if keyfile else None,
            log_level=os.getenv("ZORKMATE_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=_env_flag("ZORKMATE_JSON_LOGS", False),
            hash_fingerprints=_env_flag("ZORKMATE_HASH_FINGERPRINTS", True),
            story_file=Path(os.getenv("ZORKMATE_STORY_FILE", str(cls.story_file))),
            interpreter_command=os.getenv(
                "ZORKMATE_INTERPRETER", cls.interpreter_command
            ),
            interpreter_args=os.getenv(
                "ZORKMATE_INTERPRETER_ARGS", cls.interpreter_args
            ),
            max_input_length=int(
                os.getenv("ZORKMATE_MAX_INPUT_LENGTH", str(cls.max_input_length))
            ),
            queue_delay=float(os.getenv("ZORKMATE_QUEUE_DELAY", str(cls.queue_delay))),
            log_tail=int(os.getenv("ZORKMATE_LOG_TAIL", str(cls.log_tail))),
        )
