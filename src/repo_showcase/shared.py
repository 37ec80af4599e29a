"""Shared instances and resources for the repository widget."""

import logging
import sys

import structlog
from fastmcp import FastMCP

from .config import settings


# Configure logging immediately when module is imported
def _configure_logging():
    """Configure stdlib logging and route structlog through it."""

    root_logger = logging.getLogger()

    # Leave handlers installed by a host process alone
    if not root_logger.handlers:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(
            logging.Formatter("[%(asctime)s] %(name)s - %(levelname)s - %(message)s")
        )
        root_logger.addHandler(stream_handler)
        root_logger.setLevel(getattr(logging, settings.log_level))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.KeyValueRenderer(
                key_order=["timestamp", "level", "event", "logger"]
            ),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Silence noisy transport loggers
    for logger_name in ("httpx", "httpcore"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.getLogger("repo_showcase").debug("Logging configured")


_configure_logging()


# FastMCP server instance; also serves the HTTP proxy routes
mcp = FastMCP("Repo Showcase")
