"""
Wangfill - Logging

structlog setup for the diagnostic trace emitted by the Wang filler.
"""

import logging
import sys

import structlog


def configure_logging(debug: bool = False, json_output: bool = False) -> None:
    """
    Configure structlog for command-line and editor use.

    Args:
        debug: Show trace events (INFO); otherwise only warnings and errors
        json_output: Render one JSON object per line instead of console text
    """
    level = logging.INFO if debug else logging.WARNING
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
