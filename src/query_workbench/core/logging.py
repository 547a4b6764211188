"""structlog setup.

Everything is logged to stderr; stdout carries query results only so they
can be piped.
"""

import logging
import os
import sys
from typing import Any

import structlog

from query_workbench.core.exceptions import ConfigError

LOG_LEVEL_ENV = "QUERY_WORKBENCH_LOG_LEVEL"


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # sys.stderr is looked up per logger: CliRunner swaps it between invocations.
    return structlog.PrintLogger(file=sys.stderr)


def _resolve_level(verbose: bool, level: str | None) -> int:
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "").upper()
    if verbose or not name:
        return logging.DEBUG if verbose else logging.WARNING
    levels = logging.getLevelNamesMapping()
    if name not in levels:
        raise ConfigError(f"Unknown log level {name.lower()!r}")
    return levels[name]


def setup_logging(verbose: bool = False, level: str | None = None) -> None:
    """Configure structlog for the workbench.

    ``verbose`` forces DEBUG. Otherwise ``level`` (or $QUERY_WORKBENCH_LOG_LEVEL)
    picks the threshold, defaulting to WARNING so interactive use stays quiet.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _resolve_level(verbose, level)
        ),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(component: str | None = None) -> Any:
    """Return a logger bound to a workbench component (``tabs``, ``client``...).

    Call it at use time, not at import time, so setup_logging() applies.
    """
    logger = structlog.get_logger()
    if component:
        logger = logger.bind(component=component)
    return logger
