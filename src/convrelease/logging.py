"""Structured logging for convrelease.

Events are emitted through structlog on top of the standard library
logger named ``convrelease``. Library code only calls :func:`get_logger`;
applications opt in to output with :func:`configure_logging`, which
attaches one handler to that logger and leaves the root logger alone.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from typing import TextIO

LOGGER_NAME = "convrelease"


def _level(*, verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.WARNING
    if verbose:
        return logging.DEBUG
    return logging.INFO


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Send convrelease events to a stream.

    Args:
        verbose: Include debug events (skipped tags, unparseable commits)
        quiet: Only warnings and errors; wins over ``verbose``
        json_log: One JSON object per event instead of console lines
        stream: Destination (default: stderr)

    Returns:
        The configured ``convrelease`` standard library logger
    """
    stream = stream or sys.stderr

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if json_log:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(_level(verbose=verbose, quiet=quiet))
    logger.propagate = False
    return logger


def get_logger(name: str = LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger; module loggers pass ``__name__``."""
    return structlog.get_logger(name)
