# ABOUTME: Pydantic BaseModels for OpenWeatherMap payloads, ip-api geolocation and location queries.
# ABOUTME: Missing upstream fields default to zero values so formatting never fails on them.

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class UnitSystem(str, Enum):
    """Measurement system requested from the weather provider."""

    METRIC = "metric"
    IMPERIAL = "imperial"


class Endpoint(str, Enum):
    """OpenWeatherMap endpoint path segments."""

    CURRENT = "weather"
    FORECAST = "forecast"


class Coordinates(BaseModel):
    """A latitude/longitude pair, kept exactly as written by the caller."""

    kind: Literal["coordinates"] = "coordinates"
    lat: str
    lon: str


class PlaceName(BaseModel):
    """A free-text place name such as "London,UK"."""

    kind: Literal["name"] = "name"
    text: str


LocationQuery = Coordinates | PlaceName


class ResolvedLocation(BaseModel):
    """Outcome of location resolution for one weather request."""

    query: LocationQuery
    units: UnitSystem
    label: str


class ProviderModel(BaseModel):
    """Base for third-party payloads: a JSON null falls back to the field's default."""

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class GeoLocation(ProviderModel):
    """IP geolocation record as returned by ip-api.com."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = ""
    status: str = ""
    message: str | None = None
    country: str = ""
    country_code: str = Field("", alias="countryCode")
    region: str = ""
    region_name: str = Field("", alias="regionName")
    city: str = ""
    zip: str = ""
    lat: float = 0.0
    lon: float = 0.0
    timezone: str = ""
    isp: str = ""
    org: str = ""
    as_name: str = Field("", alias="as")


class Coord(ProviderModel):
    lat: float = 0.0
    lon: float = 0.0


class Condition(ProviderModel):
    """One entry of the provider's "weather" array."""

    id: int = 0
    main: str = ""
    description: str = ""
    icon: str = ""


class Readings(ProviderModel):
    """The provider's "main" block: temperatures, pressure and humidity."""

    temp: float = 0.0
    feels_like: float = 0.0
    temp_min: float = 0.0
    temp_max: float = 0.0
    pressure: int = 0
    humidity: int = 0
    sea_level: int = 0
    grnd_level: int = 0


class Wind(ProviderModel):
    speed: float = 0.0
    deg: int = 0
    gust: float = 0.0


class Clouds(ProviderModel):
    all: int = 0


class Volume(ProviderModel):
    """Rain or snow volume for the last three hours, in mm."""

    model_config = ConfigDict(populate_by_name=True)

    three_hours: float = Field(0.0, alias="3h")


class CurrentSys(ProviderModel):
    country: str = ""
    sunrise: int = 0
    sunset: int = 0


class WeatherReport(ProviderModel):
    """Parsed response from the current weather endpoint."""

    coord: Coord = Coord()
    weather: list[Condition] = []
    main: Readings = Readings()
    visibility: int = 0
    wind: Wind = Wind()
    clouds: Clouds = Clouds()
    dt: int = 0
    sys: CurrentSys = CurrentSys()
    timezone: int = 0
    id: int = 0
    name: str = ""


class ForecastItem(ProviderModel):
    """One three-hour sample of the forecast endpoint."""

    dt: int = 0
    main: Readings = Readings()
    weather: list[Condition] = []
    clouds: Clouds = Clouds()
    wind: Wind = Wind()
    visibility: int = 0
    pop: float = 0.0
    rain: Volume | None = None
    snow: Volume | None = None
    dt_txt: str = ""


class ForecastCity(ProviderModel):
    id: int = 0
    name: str = ""
    coord: Coord = Coord()
    country: str = ""
    population: int = 0
    timezone: int = 0
    sunrise: int = 0
    sunset: int = 0


class ForecastReport(ProviderModel):
    """Parsed response from the 5-day / 3-hour forecast endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    cnt: int = 0
    items: list[ForecastItem] = Field(default_factory=list, alias="list")
    city: ForecastCity = ForecastCity()
