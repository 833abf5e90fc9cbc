"""Structlog configuration for the admin backend.

Every probe in the application logs through structlog; this module decides
how those events are rendered.
"""

import logging
import os
import sys

import structlog

LOG_FORMAT_ENV = "ADMIN_LOG_FORMAT"


def _renders_console() -> bool:
    """Pick console rendering for terminals, JSON everywhere else.

    ADMIN_LOG_FORMAT (console or json) overrides the terminal check, and
    FORCE_COLOR=1 selects console output inside containers.
    """
    requested = os.environ.get(LOG_FORMAT_ENV, "").lower()
    if requested in ("console", "json"):
        return requested == "console"
    if os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes"):
        return True
    return sys.stdout.isatty()


def configure_logging(debug: bool = False) -> None:
    """Configure structlog processors and the minimum level.

    Args:
        debug: Emit debug-level events (probe lookups, listener timings)
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if _renders_console():
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
