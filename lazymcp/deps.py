# ABOUTME: Dependency container handed to every tool handler.
# ABOUTME: Holds the shared httpx.AsyncClient and the server settings.

import httpx
from pydantic import BaseModel, ConfigDict

from lazymcp.config import API_KEY_HELP, Settings
from lazymcp.errors import MissingConfiguration


class ToolDeps(BaseModel):
    """Dependencies injected into tool handlers by the server lifespan."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    settings: Settings

    def require_api_key(self) -> str:
        """Return the weather API key or raise MissingConfiguration."""
        api_key = self.settings.openweather_api_key
        if not api_key:
            raise MissingConfiguration(API_KEY_HELP)
        return api_key


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the httpx client used for all outbound calls.

    No retry transport: a failed request ends that tool call.
    """
    return httpx.AsyncClient(
        timeout=settings.http_timeout,
        headers={"User-Agent": "LazyMCP/1.0"},
    )
