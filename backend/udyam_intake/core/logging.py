"""
Structured logging setup (structlog over stdlib logging).

Every module grabs a logger with ``get_logger(__name__)`` and logs
key-value events::

    logger.info("Schema loaded", path=str(path), steps=3)
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

_CONFIGURED = False


def setup_logging(level: str = "INFO", *, json_logs: bool = False, force: bool = False) -> None:
    """Configure structlog and the root stdlib logger once per process."""
    global _CONFIGURED

    if _CONFIGURED and not force:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        stream=sys.stderr,
        force=force,
    )

    renderer: Any = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _CONFIGURED = True


def get_logger(name: str = "udyam_intake") -> structlog.stdlib.BoundLogger:
    """Return a bound logger for ``name``."""
    return structlog.get_logger(name)
