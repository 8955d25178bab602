# ABOUTME: MCP tool definitions for the calculator, IP and weather tools.
# ABOUTME: Handlers take explicit dependencies and return CallToolResult; failures come back flagged as errors.

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Annotated

from mcp.server.fastmcp import Context
from mcp.types import CallToolResult, TextContent
from pydantic import Field

from lazymcp.calculator import Operation, calculate, calculate_operation
from lazymcp.deps import ToolDeps
from lazymcp.errors import MissingClientIP, ToolError
from lazymcp.formatting import format_current, format_forecast
from lazymcp.ip_service import client_ip_from_headers, fetch_ip_data, format_ip_data
from lazymcp.location import resolve_location
from lazymcp.server import mcp
from lazymcp.weather_service import get_current_weather, get_forecast

logger = logging.getLogger(__name__)

LOCATION_HELP = (
    "City name (e.g. 'London' or 'New York,US') or coordinates (e.g. '40.7128,-74.0060'). "
    "Uses the client's IP location if not provided."
)


def text_result(text: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)])


def error_result(message: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=message)], isError=True)


def tool_boundary(func: Callable[..., Awaitable[str]]) -> Callable[..., Awaitable[CallToolResult]]:
    """Turn a handler's text into a tool result and any failure into an error result."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> CallToolResult:
        try:
            text = await func(*args, **kwargs)
        except ToolError as e:
            logger.warning("%s failed: %s", func.__name__, e)
            return error_result(str(e))
        except Exception:
            logger.exception("%s raised an unexpected error", func.__name__)
            return error_result("Internal error while running the tool")
        return text_result(text)

    return wrapper


@tool_boundary
async def run_calculate(expression: str) -> str:
    return calculate(expression)


@tool_boundary
async def run_calculate_operation(operation: Operation, x: float, y: float | None = None) -> str:
    return calculate_operation(operation, x, y)


@tool_boundary
async def run_get_ip(client_ip: str | None) -> str:
    if not client_ip:
        raise MissingClientIP("Could not determine client IP address")
    return client_ip


@tool_boundary
async def run_get_ip_data(deps: ToolDeps, ip: str | None, client_ip: str | None) -> str:
    target = ip or client_ip
    if not target:
        raise MissingClientIP("could not determine client IP address and no IP parameter provided")
    return format_ip_data(await fetch_ip_data(deps.http_client, target))


@tool_boundary
async def run_get_weather(deps: ToolDeps, location: str | None, client_ip: str | None) -> str:
    api_key = deps.require_api_key()
    resolved = await resolve_location(deps.http_client, location, client_ip)
    report = await get_current_weather(deps.http_client, resolved.query, api_key, resolved.units)
    return format_current(report, resolved.label, resolved.units)


@tool_boundary
async def run_get_weather_forecast(deps: ToolDeps, location: str | None, client_ip: str | None) -> str:
    api_key = deps.require_api_key()
    resolved = await resolve_location(deps.http_client, location, client_ip)
    report = await get_forecast(deps.http_client, resolved.query, api_key, resolved.units)
    return format_forecast(report, resolved.label, resolved.units)


def client_ip_from_context(ctx: Context) -> str | None:
    """Caller IP for the current HTTP request, or None outside an HTTP transport."""
    request = ctx.request_context.request
    if request is None:
        return None
    peer = request.client.host if request.client else None
    return client_ip_from_headers(request.headers, peer)


def _deps(ctx: Context) -> ToolDeps:
    return ctx.request_context.lifespan_context


@mcp.tool(
    name="calculate",
    description=(
        "Evaluate mathematical expressions using natural syntax (e.g., '2 + 3 * 4', 'sin(pi/4)', 'sqrt(16)')"
    ),
    structured_output=False,
)
async def calculate_tool(
    expression: Annotated[
        str,
        Field(
            description="Mathematical expression to evaluate. Supports +, -, *, /, %, ^, sqrt(), sin(), cos(), "
            "tan(), asin(), acos(), atan(), log(), ln(), abs(), ceil(), floor(), round(), pow(), pi, e"
        ),
    ],
) -> CallToolResult:
    logger.info("calculate called with expression=%r", expression)
    return await run_calculate(expression)


@mcp.tool(
    name="calculate_operation",
    description="Apply a single arithmetic operation to x (and y for binary operations); result has two decimals",
    structured_output=False,
)
async def calculate_operation_tool(
    operation: Annotated[Operation, Field(description="Operation to apply")],
    x: Annotated[float, Field(description="First operand")],
    y: Annotated[float | None, Field(description="Second operand, required for binary operations")] = None,
) -> CallToolResult:
    logger.info("calculate_operation called with operation=%s x=%r y=%r", operation, x, y)
    return await run_calculate_operation(operation, x, y)


@mcp.tool(name="get_ip", description="Get the IP address of the client making the request", structured_output=False)
async def get_ip_tool(ctx: Context) -> CallToolResult:
    return await run_get_ip(client_ip_from_context(ctx))


@mcp.tool(
    name="get_ip_data",
    description="Get detailed information about the client's IP address including geolocation data",
    structured_output=False,
)
async def get_ip_data_tool(
    ctx: Context,
    ip: Annotated[
        str | None, Field(description="IP address to lookup (optional, uses client IP if not provided)")
    ] = None,
) -> CallToolResult:
    logger.info("get_ip_data called with ip=%r", ip)
    return await run_get_ip_data(_deps(ctx), ip, client_ip_from_context(ctx))


@mcp.tool(
    name="get_weather",
    description=(
        "Get current weather for a location. Uses client's IP location by default, or accepts a custom "
        "location parameter (city name or 'lat,lon' coordinates)"
    ),
    structured_output=False,
)
async def get_weather_tool(
    ctx: Context,
    location: Annotated[str | None, Field(description=f"Location to get weather for (optional). {LOCATION_HELP}")] = None,
) -> CallToolResult:
    logger.info("get_weather called with location=%r", location)
    return await run_get_weather(_deps(ctx), location, client_ip_from_context(ctx))


@mcp.tool(
    name="get_weather_forecast",
    description=(
        "Get 5-day weather forecast for a location. Uses client's IP location by default, or accepts a custom "
        "location parameter (city name or 'lat,lon' coordinates)"
    ),
    structured_output=False,
)
async def get_weather_forecast_tool(
    ctx: Context,
    location: Annotated[
        str | None, Field(description=f"Location to get forecast for (optional). {LOCATION_HELP}")
    ] = None,
) -> CallToolResult:
    logger.info("get_weather_forecast called with location=%r", location)
    return await run_get_weather_forecast(_deps(ctx), location, client_ip_from_context(ctx))
