"""Structured logging configuration.

structlog is routed through stdlib ``logging`` from import time, so until
``setup_logging()`` runs the stdlib defaults apply: WARNING and above, on
stderr. ``setup_logging()`` applies the configured level and renderer.
"""
import logging
import sys
from typing import Any

import structlog

from confinedfs.core.config import Settings, get_settings

_configured = False


def configure_structlog(json_logs: bool = False) -> None:
    """Route structlog through stdlib loggers, filtered by their level."""
    renderer: Any
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def setup_logging(config: Settings | None = None) -> None:
    """Apply the configured level and renderer, and install a stdout handler.

    Safe to call more than once; only the first call has an effect.
    """
    global _configured
    if _configured:
        return

    config = config or get_settings()
    level = getattr(logging, config.log_level, logging.INFO)

    configure_structlog(json_logs=config.log_format == "json")

    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)

    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger bound to ``name``."""
    return structlog.stdlib.get_logger(name)


configure_structlog()
