"""
utils/logging.py — structlog setup for the flood-control pipeline.

Log events go to stderr so that report output on stdout (the summary JSON
in particular) stays machine-readable. Rendering is JSON or console per
settings.log_format; the CLI group calls configure_logging() with its
--log-level / --log-format options before any command runs.

Module-level loggers stay lazy: structlog resolves them against the
current configuration on every call, so a later configure_logging()
(another CLI invocation in the same process, a test) takes effect
everywhere.

Usage:
    from dpwh_pipeline.utils.logging import configure_logging, get_logger

    log = get_logger(__name__, pipeline="flood_control")

    configure_logging(log_level="DEBUG", log_format="json")
    log.info("rows_loaded", loaded=1234, retained=980)
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from dpwh_shared.config import settings


def _resolve_level(log_level: str | None) -> int:
    name = (log_level or settings.log_level).upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(
    log_level: str | None = None,
    log_format: str | None = None,
) -> None:
    """
    Point structlog (and the stdlib root logger behind it) at stderr.

    Safe to call repeatedly; each call replaces the previous setup.

    Args:
        log_level:  Override settings.log_level ("DEBUG", "INFO", ...).
        log_format: Override settings.log_format ("json" | "console").
    """
    level = _resolve_level(log_level)
    fmt = log_format or settings.log_format

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )

    if fmt == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Module-level proxies must re-read the config after reconfiguration.
        cache_logger_on_first_use=False,
    )


def get_logger(name: str, **initial_values: Any) -> Any:
    """
    Lazy structlog logger named `name` carrying `initial_values` on every event.

    Nothing is bound until the first log call, so this is safe at import time.
    """
    return structlog.get_logger(name, **initial_values)
