# ABOUTME: Markdown rendering for current weather and forecast reports.
# ABOUTME: Labels values in the unit system the request was made with; no unit conversion of temperatures.

from datetime import datetime, timedelta, timezone

from lazymcp.models import ForecastItem, ForecastReport, UnitSystem, WeatherReport

WIND_DIRECTIONS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)  # fmt: skip

METERS_PER_MILE = 1609.34

NEXT_HOURS_SAMPLES = 8
MAX_FORECAST_DAYS = 5


def wind_direction(degrees: int) -> str:
    """Map a bearing in degrees to a 16-point compass label."""
    return WIND_DIRECTIONS[int((degrees + 11.25) / 22.5) % 16]


def to_title(text: str) -> str:
    """Uppercase the first letter of each word, leaving the rest untouched."""
    return " ".join(word[0].upper() + word[1:] for word in text.split())


def _temp(value: float, units: UnitSystem) -> str:
    suffix = "°F" if units is UnitSystem.IMPERIAL else "°C"
    return f"{value:.1f}{suffix}"


def _header(title: str, resolved_name: str, requested: str | None) -> list[str]:
    lines = [f"# {title}: {resolved_name}", ""]
    if requested and requested != resolved_name:
        lines += [f"*Requested location: {requested}*", ""]
    return lines


def format_current(report: WeatherReport, requested: str | None, units: UnitSystem) -> str:
    """Render current conditions as markdown.

    The range, wind, visibility and cloudiness lines are left out when the
    provider reported nothing useful for them.
    """
    imperial = units is UnitSystem.IMPERIAL
    main = report.main
    lines = _header("Weather Information", report.name, requested)

    lines.append("## Current Conditions")
    if report.weather:
        condition = report.weather[0]
        lines.append(f"- **Condition:** {to_title(condition.description)} ({condition.main})")
    lines.append(f"- **Temperature:** {_temp(main.temp, units)} (feels like {_temp(main.feels_like, units)})")
    if main.temp_min != main.temp_max:
        lines.append(f"- **Range:** {_temp(main.temp_min, units)} - {_temp(main.temp_max, units)}")
    lines.append(f"- **Humidity:** {main.humidity}%")
    if imperial:
        # Raw hPa figure with an inHg label, kept for output compatibility.
        lines.append(f"- **Pressure:** {float(main.pressure):.2f} inHg")
    else:
        lines.append(f"- **Pressure:** {main.pressure} hPa")

    lines += ["", "## Details"]
    if report.wind.speed > 0:
        speed_unit = "mph" if imperial else "m/s"
        lines.append(
            f"- **Wind:** {report.wind.speed:.1f} {speed_unit} "
            f"{wind_direction(report.wind.deg)} ({report.wind.deg}°)"
        )
    if report.visibility > 0:
        if imperial:
            lines.append(f"- **Visibility:** {report.visibility / METERS_PER_MILE:.1f} miles")
        else:
            lines.append(f"- **Visibility:** {report.visibility / 1000:.1f} km")
    if report.clouds.all > 0:
        lines.append(f"- **Cloudiness:** {report.clouds.all}%")

    lines += _location_section(report.name, report.sys.country, report.coord.lat, report.coord.lon)
    return "\n".join(lines) + "\n"


def format_forecast(report: ForecastReport, requested: str | None, units: UnitSystem) -> str:
    """Render a 5-day / 3-hour forecast as markdown.

    Times are shown in the forecast city's local time. The daily section groups
    samples by calendar day in the order days first appear, up to five days.
    """
    tz = timezone(timedelta(seconds=report.city.timezone))
    lines = _header("Weather Forecast", report.city.name, requested)

    lines += ["## Next 24 Hours", ""]
    for item in report.items[:NEXT_HOURS_SAMPLES]:
        when = datetime.fromtimestamp(item.dt, tz)
        condition = to_title(item.weather[0].description) if item.weather else ""
        pop = f" ({item.pop * 100:.0f}% chance rain)" if item.pop > 0 else ""
        lines.append(f"**{_time_label(when)}**: {_temp(item.main.temp, units)}, {condition}{pop}")

    lines += ["", "## 5-Day Forecast", ""]
    for day, items in list(group_by_day(report.items, tz).items())[:MAX_FORECAST_DAYS]:
        lines.append(_day_summary(day, items, units))

    city = report.city
    lines += _location_section(city.name, city.country, city.coord.lat, city.coord.lon)
    return "\n".join(lines) + "\n"


def group_by_day(items: list[ForecastItem], tz: timezone) -> dict[str, list[ForecastItem]]:
    """Group samples by calendar day label, keeping days in first-seen order."""
    days: dict[str, list[ForecastItem]] = {}
    for item in items:
        when = datetime.fromtimestamp(item.dt, tz)
        days.setdefault(f"{when:%a %b} {when.day}", []).append(item)
    return days


def most_common_condition(items: list[ForecastItem]) -> str:
    """Most frequent condition category; on a tie the one seen first wins."""
    counts: dict[str, int] = {}
    best = ""
    for item in items:
        if not item.weather:
            continue
        category = item.weather[0].main
        counts[category] = counts.get(category, 0) + 1
        if counts[category] > counts.get(best, 0):
            best = category
    return best


def _day_summary(day: str, items: list[ForecastItem], units: UnitSystem) -> str:
    low = min(item.main.temp_min for item in items)
    high = max(item.main.temp_max for item in items)
    max_pop = max((item.pop for item in items), default=0.0)
    precip = f", {max_pop * 100:.0f}% chance precipitation" if max_pop > 0 else ""
    return f"**{day}**: {_temp(low, units)} - {_temp(high, units)}, {most_common_condition(items)}{precip}"


def _time_label(when: datetime) -> str:
    # e.g. "Tue 3:00 PM"
    return f"{when:%a} {when.hour % 12 or 12}:{when:%M %p}"


def _location_section(name: str, country: str, lat: float, lon: float) -> list[str]:
    return [
        "",
        "## Location",
        f"- **City:** {name}, {country}",
        f"- **Coordinates:** {lat:.4f}, {lon:.4f}",
    ]
