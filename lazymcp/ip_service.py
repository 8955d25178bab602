# ABOUTME: IP geolocation via ip-api.com and client IP detection from HTTP headers.
# ABOUTME: Also renders the markdown report returned by the get_ip_data tool.

import logging
from collections.abc import Mapping

import httpx
from pydantic import ValidationError

from lazymcp.errors import MalformedUpstreamPayload, UpstreamFetchFailed, UpstreamStatusFailed
from lazymcp.models import GeoLocation

logger = logging.getLogger(__name__)

IP_API_URL = "http://ip-api.com/json/{ip}"


async def fetch_ip_data(client: httpx.AsyncClient, ip: str) -> GeoLocation:
    """Look up geolocation data for an IP address.

    Raises UpstreamFetchFailed on transport errors, MalformedUpstreamPayload when the
    body is not a geolocation record, and UpstreamStatusFailed unless the service
    reports status "success".
    """
    logger.info("Looking up IP data for %s", ip)
    try:
        resp = await client.get(IP_API_URL.format(ip=ip))
    except httpx.HTTPError as e:
        raise UpstreamFetchFailed(f"failed to fetch IP data: {e}") from e

    try:
        data = GeoLocation.model_validate(resp.json())
    except (ValueError, ValidationError) as e:
        raise MalformedUpstreamPayload(f"failed to parse response: {e}") from e

    if data.status != "success":
        logger.warning("IP lookup for %s returned status %r (%s)", ip, data.status, data.message)
        raise UpstreamStatusFailed("failed to get IP data from service")
    return data


def format_ip_data(data: GeoLocation) -> str:
    """Render a geolocation record as markdown."""
    lines = [
        f"# IP Address Information: {data.query}",
        "",
        "## Location",
        f"- **Country:** {data.country} ({data.country_code})",
        f"- **Region:** {data.region_name} ({data.region})",
        f"- **City:** {data.city}",
    ]
    if data.zip:
        lines.append(f"- **ZIP Code:** {data.zip}")
    lines += [
        f"- **Coordinates:** {data.lat:.4f}, {data.lon:.4f}",
        f"- **Timezone:** {data.timezone}",
        "",
        "## Network Information",
        f"- **ISP:** {data.isp}",
        f"- **Organization:** {data.org}",
        f"- **AS:** {data.as_name}",
    ]
    return "\n".join(lines) + "\n"


def client_ip_from_headers(headers: Mapping[str, str], remote_addr: str | None = None) -> str | None:
    """Work out the caller's IP from proxy headers, falling back to the peer address.

    Header lookups use lowercase names; Starlette and httpx header mappings are
    case-insensitive, plain dicts must use lowercase keys.
    """
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        # May hold a proxy chain; the first hop is the client.
        return forwarded.split(",")[0].strip()

    for name in ("x-real-ip", "cf-connecting-ip"):
        value = headers.get(name)
        if value:
            return value

    if not remote_addr:
        return None
    if remote_addr.startswith("["):
        return remote_addr[1:].split("]")[0]
    if remote_addr.count(":") == 1:
        return remote_addr.split(":")[0]
    return remote_addr
