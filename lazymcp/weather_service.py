# ABOUTME: Service layer for OpenWeatherMap calls and response parsing.
# ABOUTME: Builds current/forecast URLs from a location query and fetches them into pydantic models.

import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from lazymcp.errors import MalformedUpstreamPayload, UpstreamFetchFailed, UpstreamStatusFailed
from lazymcp.location import parse_location
from lazymcp.models import Coordinates, Endpoint, ForecastReport, LocationQuery, UnitSystem, WeatherReport

logger = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"

ReportT = TypeVar("ReportT", bound=BaseModel)


def build_weather_url(
    query: LocationQuery,
    api_key: str,
    units: UnitSystem,
    endpoint: Endpoint = Endpoint.CURRENT,
) -> str:
    """Build the provider URL for a location query.

    Place names go into ``q`` verbatim (commas included); coordinates go into
    ``lat``/``lon`` with the precision they were given.
    """
    if isinstance(query, Coordinates):
        location_params = f"lat={query.lat}&lon={query.lon}"
    else:
        location_params = f"q={query.text}"
    return f"{OPENWEATHER_BASE_URL}/{endpoint.value}?{location_params}&appid={api_key}&units={units.value}"


def build_weather_url_from_location(
    location: str,
    api_key: str,
    units: UnitSystem,
    endpoint: Endpoint = Endpoint.CURRENT,
) -> str:
    """Parse location text and build the provider URL for it."""
    return build_weather_url(parse_location(location), api_key, units, endpoint)


async def fetch_weather_payload(client: httpx.AsyncClient, url: str, model: type[ReportT]) -> ReportT:
    """Fetch a provider URL and parse the body into the given model.

    Transport errors raise UpstreamFetchFailed, non-200 answers raise UpstreamStatusFailed
    with the body verbatim, and unparseable bodies raise MalformedUpstreamPayload.
    """
    try:
        resp = await client.get(url)
    except httpx.HTTPError as e:
        raise UpstreamFetchFailed(f"failed to fetch weather data: {e}") from e

    if resp.status_code != 200:
        logger.warning("Weather API answered %s", resp.status_code)
        raise UpstreamStatusFailed(f"weather API error (status {resp.status_code}): {resp.text}")

    try:
        return model.model_validate(resp.json())
    except (ValueError, ValidationError) as e:
        raise MalformedUpstreamPayload(f"Failed to parse weather response: {e}") from e


async def get_current_weather(
    client: httpx.AsyncClient,
    query: LocationQuery,
    api_key: str,
    units: UnitSystem,
) -> WeatherReport:
    """Fetch current conditions for a location."""
    url = build_weather_url(query, api_key, units, Endpoint.CURRENT)
    return await fetch_weather_payload(client, url, WeatherReport)


async def get_forecast(
    client: httpx.AsyncClient,
    query: LocationQuery,
    api_key: str,
    units: UnitSystem,
) -> ForecastReport:
    """Fetch the 5-day / 3-hour forecast for a location."""
    url = build_weather_url(query, api_key, units, Endpoint.FORECAST)
    return await fetch_weather_payload(client, url, ForecastReport)
