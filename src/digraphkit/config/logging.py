"""structlog configuration for digraphkit.

Two output modes:
- Human (default): colored console output to stderr
- JSON (``log_json=True``): structured JSON lines to stderr

The library never configures logging on import, and services do not touch
the process-wide handlers. Applications call :func:`configure_logging`, or
:func:`configure_from_settings` with ``DigraphSettings.load().logging``,
once at startup.
"""

from __future__ import annotations

import logging
import sys

import structlog

from digraphkit.config.models import LoggingConfig


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output for ``digraphkit``. When False,
            only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
    """
    pkg_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("digraphkit").setLevel(pkg_level)
    logging.getLogger("networkx").setLevel(logging.WARNING)


def configure_from_settings(config: LoggingConfig) -> None:
    """Apply a ``[logging]`` section, typically ``DigraphSettings.load().logging``."""
    configure_logging(verbose=config.verbose, log_json=config.log_json)
