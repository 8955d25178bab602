# ABOUTME: Server settings loaded from environment variables and an optional .env file.
# ABOUTME: Settings are built once at startup and injected into tools through ToolDeps.

import os

from dotenv import load_dotenv
from pydantic import BaseModel

API_KEY_HELP = (
    "OpenWeatherMap API key not configured. Please set OPENWEATHER_API_KEY environment variable. "
    "Get your free API key at https://openweathermap.org/api"
)


class Settings(BaseModel):
    """Runtime configuration for the LazyMCP server."""

    openweather_api_key: str | None = None
    host: str = "0.0.0.0"
    port: int = 3000
    http_timeout: float = 10.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment, reading .env first if present."""
        load_dotenv()
        return cls(
            openweather_api_key=os.environ.get("OPENWEATHER_API_KEY") or None,
            host=os.environ.get("LAZYMCP_HOST", "0.0.0.0"),
            port=int(os.environ.get("LAZYMCP_PORT", "3000")),
            http_timeout=float(os.environ.get("LAZYMCP_HTTP_TIMEOUT", "10.0")),
            log_level=os.environ.get("LAZYMCP_LOG_LEVEL", "INFO").upper(),
        )
