"""Structured logging for the CLI and the API server.

Log events go to stderr so that ``pitchcraft research --json`` and friends
keep stdout parseable. The CLI binds the running subcommand and the API
middleware binds a correlation id; both reach every event through
``merge_contextvars``.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

APP_NAME = "pitchcraft"

# One INFO line per HTTP request; only shown when debugging.
CHATTY_LOGGERS = ("httpx", "httpcore", "anthropic")


def add_app_name(_logger: WrappedLogger, _method: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("app", APP_NAME)
    return event_dict


def bind_command(command: str | None) -> None:
    """Tag every following event with the CLI subcommand being run."""
    structlog.contextvars.clear_contextvars()
    if command:
        structlog.contextvars.bind_contextvars(command=command)


def configure_logging(log_level: str = "INFO", log_format: str = "console") -> None:
    """Configure structlog and route stdlib loggers through the same renderer.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        log_format: "console" for human-readable output, "json" for machine-readable.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        add_app_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *shared_processors,
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    chatty_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(chatty_level)
