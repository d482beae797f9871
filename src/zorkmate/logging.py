"""Structured logging for Zorkmate."""

import hashlib
import sys
from pathlib import Path
from typing import Any, TextIO

import structlog

_LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}

# Commands can be long pasted text; keep log lines readable
MAX_LOGGED_COMMAND = 80


def hash_fingerprint_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Replace operator certificate fingerprints with a short hash."""
    fp = event_dict.pop("fingerprint", None)
    if fp is None:
        return event_dict
    if fp and fp != "unknown":
        event_dict["fingerprint_hash"] = hashlib.sha256(fp.encode()).hexdigest()[:12]
    else:
        event_dict["fingerprint"] = fp
    return event_dict


def clip_command_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    command = event_dict.get("command")
    if isinstance(command, str) and len(command) > MAX_LOGGED_COMMAND:
        event_dict["command"] = command[:MAX_LOGGED_COMMAND] + "..."
    return event_dict


def _open_stream(log_file: Path | None) -> TextIO:
    if log_file:
        return open(log_file, "a")
    return sys.stdout


def configure_logging(
    log_level: str = "INFO",
    log_file: Path | None = None,
    json_logs: bool = False,
    hash_fingerprints: bool = True,
) -> None:
    """Configure structlog once for the whole process."""
    stream = _open_stream(log_file)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(
            fmt="iso" if json_logs else "%Y-%m-%d %H:%M:%S"
        ),
        clip_command_processor,
    ]
    if hash_fingerprints:
        processors.append(hash_fingerprint_processor)

    if json_logs:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            _LEVELS.get(log_level.upper(), 20)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance for a module."""
    return structlog.get_logger(name)
