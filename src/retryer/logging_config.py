"""Structured logging for the retryer.

Library modules obtain their loggers from get_logger(), which wraps the
stdlib logger of the same name: events follow the host application's
logging configuration and stay silent when it has none. Applications
that want the retryer's own rendering call configure_logging(), which
attaches a structlog formatter to the "retryer" logger only (JSON lines
in production, colored console output in development).
"""

import logging
import sys

import structlog
from structlog.types import EventDict, WrappedLogger

from retryer.config import settings

LOGGER_NAME = "retryer"
HANDLER_NAME = "retryer-structlog"


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structlog logger bound to logging.getLogger(name)."""
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add library context to all log events."""
    event_dict["app"] = "retryer"
    return event_dict


def configure_logging(log_level: str | None = None, environment: str | None = None) -> None:
    """Render retryer events through structlog.

    Args:
        log_level: Level for the "retryer" logger (DEBUG, INFO, WARNING, ...),
            defaults to settings.LOG_LEVEL
        environment: "production" selects JSON output, anything else the
            console renderer; defaults to settings.ENVIRONMENT

    Handlers installed by the host on other loggers are left untouched;
    calling this again replaces the handler added by the previous call.
    """
    log_level = log_level or settings.LOG_LEVEL
    environment = environment or settings.ENVIRONMENT
    level = getattr(logging, log_level.upper(), logging.INFO)
    json_output = environment.lower() == "production"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]
    if json_output:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared_processors)
    )
    handler.setLevel(level)

    library_logger = logging.getLogger(LOGGER_NAME)
    for existing in [h for h in library_logger.handlers if h.get_name() == HANDLER_NAME]:
        library_logger.removeHandler(existing)
    library_logger.addHandler(handler)
    library_logger.setLevel(level)
    # Rendered here; the host's root handlers would print it a second time
    library_logger.propagate = False

    get_logger(__name__).debug(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        renderer="json" if json_output else "console",
    )
