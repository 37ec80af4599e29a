"""Server main entry point."""

import sys

import structlog

from .config import settings
from .shared import mcp

# Import routes and tools to register them
from . import routes, tools  # noqa: F401

logger = structlog.get_logger(__name__)


def create_app():
    """ASGI application serving the MCP endpoint and the proxy routes."""
    return mcp.http_app()


def main() -> None:
    """Main entry point for the widget server."""

    if not settings.github_username:
        logger.warning("No GitHub username configured; the repository feed will fail")
    if not settings.github_token:
        logger.info("No GitHub token configured; using anonymous access")

    try:
        logger.info("Starting Repo Showcase", host=settings.host, port=settings.port, log_level=settings.log_level)
        mcp.run(transport="http", host=settings.host, port=settings.port)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error("Server failed to start", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
