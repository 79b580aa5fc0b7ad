"""structlog configuration for console output."""

import logging
import sys

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Send structlog events to stderr.

    Only warnings and errors are shown unless *verbose* is set, in which
    case debug events are included.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
