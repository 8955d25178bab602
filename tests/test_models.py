# ABOUTME: Contract tests for Pydantic models used in weather and geolocation parsing.
# ABOUTME: Validates that models parse provider payloads and default missing fields to zero values.

from lazymcp.formatting import format_current
from lazymcp.models import (
    Coordinates,
    ForecastReport,
    GeoLocation,
    PlaceName,
    ResolvedLocation,
    UnitSystem,
    WeatherReport,
)


class TestGeoLocation:
    def test_parses_ip_api_payload(self, ip_payload):
        """GeoLocation reads ip-api's camelCase and reserved-word keys.

        Implementation: Validates a full ip-api.com success payload.
        Passing implies: countryCode, regionName and "as" land on their snake_case fields.
        """
        geo = GeoLocation.model_validate(ip_payload)
        assert geo.status == "success"
        assert geo.country_code == "US"
        assert geo.region_name == "California"
        assert geo.as_name == "AS15169 Google LLC"
        assert geo.lat == 37.4056

    def test_failed_lookup_parses(self):
        """A failure payload still parses so the caller can inspect its status.

        Implementation: Validates ip-api's failure shape.
        Passing implies: Missing location fields default to empty values.
        """
        geo = GeoLocation.model_validate({"status": "fail", "message": "private range", "query": "10.0.0.1"})
        assert geo.status == "fail"
        assert geo.message == "private range"
        assert geo.city == ""
        assert geo.lat == 0.0


class TestWeatherReport:
    def test_parses_current_payload(self, current_payload):
        """WeatherReport accepts a full current-weather response.

        Implementation: Validates the Mountain View fixture.
        Passing implies: Nested blocks (main, wind, sys, coord) are parsed into their models.
        """
        report = WeatherReport.model_validate(current_payload)
        assert report.name == "Mountain View"
        assert report.main.temp == 22.5
        assert report.main.pressure == 1013
        assert report.wind.deg == 220
        assert report.sys.country == "US"
        assert report.coord.lat == 37.4056
        assert report.weather[0].description == "clear sky"

    def test_missing_fields_default_to_zero(self):
        """An empty object parses into an all-zero report.

        Implementation: Validates {}.
        Passing implies: Formatting can rely on every field being present.
        """
        report = WeatherReport.model_validate({})
        assert report.name == ""
        assert report.weather == []
        assert report.wind.speed == 0.0
        assert report.visibility == 0
        assert report.clouds.all == 0

    def test_null_fields_default_to_zero(self, current_payload):
        """JSON nulls are read as the field's zero value.

        Implementation: Sets visibility and wind.speed to None, then validates and formats.
        Passing implies: Nulls leave their lines out of the report instead of failing the request.
        """
        current_payload["visibility"] = None
        current_payload["wind"]["speed"] = None
        report = WeatherReport.model_validate(current_payload)

        assert report.visibility == 0
        assert report.wind.speed == 0.0
        assert report.wind.deg == 220
        result = format_current(report, None, UnitSystem.METRIC)
        assert "**Wind:**" not in result
        assert "**Visibility:**" not in result
        assert "- **Temperature:** 22.5°C (feels like 21.8°C)" in result

    def test_null_blocks_default_to_empty(self, current_payload):
        """A null nested block parses as an empty one.

        Implementation: Sets main and sys to None.
        Passing implies: Whole missing sections still render as zeros.
        """
        current_payload.update(main=None, sys=None)
        report = WeatherReport.model_validate(current_payload)
        assert report.main.temp == 0.0
        assert report.sys.country == ""


class TestForecastReport:
    def test_parses_list_and_city(self, forecast_payload):
        """ForecastReport maps the provider's "list" key to items.

        Implementation: Validates the Valencia fixture.
        Passing implies: Samples keep their order and city metadata is available.
        """
        report = ForecastReport.model_validate(forecast_payload)
        assert len(report.items) == 10
        assert report.items[0].main.temp == 10.0
        assert report.items[2].pop == 0.2
        assert report.city.name == "Valencia"
        assert report.city.country == "ES"

    def test_rain_volume_is_optional(self, forecast_payload):
        """Rain volume is read from the "3h" key when present and None otherwise.

        Implementation: Compares a dry sample with a rainy one.
        Passing implies: The aliased Volume model parses provider keys.
        """
        report = ForecastReport.model_validate(forecast_payload)
        assert report.items[0].rain is None
        assert report.items[8].rain.three_hours == 0.4
        assert report.items[8].snow is None


class TestLocationModels:
    def test_resolved_location_keeps_query_kind(self):
        """ResolvedLocation holds either query kind.

        Implementation: Builds one of each.
        Passing implies: The union field accepts both Coordinates and PlaceName.
        """
        by_coords = ResolvedLocation(query=Coordinates(lat="1.5", lon="2"), units=UnitSystem.METRIC, label="x")
        by_name = ResolvedLocation(query=PlaceName(text="Paris"), units=UnitSystem.IMPERIAL, label="Paris")
        assert isinstance(by_coords.query, Coordinates)
        assert isinstance(by_name.query, PlaceName)
        assert by_name.units.value == "imperial"
