import logging
import sys

import structlog


def setup_logging(level: str) -> None:
    """
    maps string log level to logging module levels and configures
    structlog to render to stderr, keeping stdout for the status line.
    """
    numeric_level = getattr(logging, level.upper(), logging.ERROR)
    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        stream=sys.stderr,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
