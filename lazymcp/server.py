# ABOUTME: FastMCP server definition for the LazyMCP tools.
# ABOUTME: Loads settings, manages the shared HTTP client through the lifespan, and imports tool registrations.

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from mcp.server.fastmcp import FastMCP

from lazymcp.config import Settings
from lazymcp.deps import ToolDeps, create_http_client

settings = Settings.from_env()


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[ToolDeps]:
    """Open one HTTP client for the server's lifetime and hand it to tools as ToolDeps."""
    async with create_http_client(settings) as client:
        yield ToolDeps(http_client=client, settings=settings)


mcp = FastMCP(
    "LazyMCP",
    instructions=(
        "General-purpose tools: a calculator, the caller's IP address and its geolocation, "
        "and current weather or a 5-day forecast for a place name, 'lat,lon' coordinates, "
        "or the caller's IP location when no location is given."
    ),
    host=settings.host,
    port=settings.port,
    log_level=settings.log_level,
    lifespan=lifespan,
)


# Import tools module to register @mcp.tool decorators
import lazymcp.tools  # noqa: E402, F401
