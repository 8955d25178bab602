# ABOUTME: ASGI entry point serving the MCP tools over streamable HTTP.
# ABOUTME: Exposes the Starlette app for any ASGI server and a main() that runs it with uvicorn.

import logging
import sys

import uvicorn

from lazymcp.server import mcp, settings

logger = logging.getLogger(__name__)

app = mcp.streamable_http_app()


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str) -> None:
    """Send all logs to stderr in one format.

    FastMCP installs its own root handler when the server is created, so it is replaced here.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


def main() -> None:
    """Configure logging to stderr and serve the MCP endpoint."""
    configure_logging(settings.log_level)
    if not settings.openweather_api_key:
        logger.warning("OPENWEATHER_API_KEY is not set; weather tools will return a configuration error")
    logger.info("HTTP server starting on http://%s:%s%s", settings.host, settings.port, mcp.settings.streamable_http_path)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
