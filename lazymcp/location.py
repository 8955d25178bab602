# ABOUTME: Location resolution for the weather tools.
# ABOUTME: Classifies location text, picks the unit system and falls back to IP geolocation.

import logging

import httpx

from lazymcp.errors import LocationResolutionFailed, MissingClientIP, ToolError
from lazymcp.ip_service import fetch_ip_data
from lazymcp.models import Coordinates, LocationQuery, PlaceName, ResolvedLocation, UnitSystem

logger = logging.getLogger(__name__)

US_INDICATORS = (",US", ", US", "USA", "UNITED STATES")

US_STATE_CODES = ("CA", "NY", "TX", "FL", "IL", "PA", "OH", "GA", "NC", "MI")


def parse_location(text: str) -> LocationQuery:
    """Classify location text as a coordinate pair or a place name.

    Exactly one comma with a number on each side means coordinates; anything else
    is passed to the provider as a name.
    """
    parts = text.split(",")
    if len(parts) == 2:
        lat, lon = parts[0].strip(), parts[1].strip()
        if _is_number(lat) and _is_number(lon):
            return Coordinates(lat=lat, lon=lon)
    return PlaceName(text=text)


def _is_number(value: str) -> bool:
    try:
        float(value)
    except ValueError:
        return False
    return True


def determine_units(location: str) -> UnitSystem:
    """Guess the unit system from location text: imperial for US places, metric otherwise."""
    upper = location.upper()

    # Canadian addresses can carry US-looking fragments ("..., ON, Canada")
    if "CANADA" in upper:
        return UnitSystem.METRIC

    if any(indicator in upper for indicator in US_INDICATORS):
        return UnitSystem.IMPERIAL

    for code in US_STATE_CODES:
        if f",{code}" in upper or f" {code}" in upper:
            return UnitSystem.IMPERIAL

    return UnitSystem.METRIC


async def resolve_location(
    client: httpx.AsyncClient,
    location: str | None,
    client_ip: str | None,
) -> ResolvedLocation:
    """Decide what to ask the weather provider for, and in which units.

    An explicit location wins. Without one, the caller's IP is geolocated and the
    unit system follows the country (imperial only for the US).
    """
    if location:
        return ResolvedLocation(query=parse_location(location), units=determine_units(location), label=location)

    if not client_ip:
        raise MissingClientIP(
            "Failed to get location from IP: could not determine client IP address and no location provided"
        )

    try:
        geo = await fetch_ip_data(client, client_ip)
    except ToolError as e:
        raise LocationResolutionFailed(f"Failed to get location from IP: {e}") from e

    units = UnitSystem.IMPERIAL if geo.country_code == "US" else UnitSystem.METRIC
    logger.info("Resolved %s to %s, %s (%s)", client_ip, geo.city, geo.country, units.value)
    return ResolvedLocation(
        query=Coordinates(lat=repr(geo.lat), lon=repr(geo.lon)),
        units=units,
        label=f"{geo.city}, {geo.country}",
    )
