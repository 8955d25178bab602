# ABOUTME: Shared test fixtures for the LazyMCP test suite.
# ABOUTME: Provides OpenWeatherMap and ip-api payloads modelled on real responses.

import pytest

# Tue 14 Nov 2023 00:00:00 UTC
FORECAST_START = 1699920000


@pytest.fixture
def current_payload() -> dict:
    """Current weather response for Mountain View in metric units."""
    return {
        "coord": {"lon": -122.0775, "lat": 37.4056},
        "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
        "base": "stations",
        "main": {
            "temp": 22.5,
            "feels_like": 21.8,
            "temp_min": 20.0,
            "temp_max": 25.0,
            "pressure": 1013,
            "humidity": 65,
        },
        "visibility": 10000,
        "wind": {"speed": 3.5, "deg": 220},
        "clouds": {"all": 0},
        "dt": 1699963200,
        "sys": {"type": 2, "id": 2010364, "country": "US", "sunrise": 1699972475, "sunset": 1700009757},
        "timezone": -28800,
        "id": 5375480,
        "name": "Mountain View",
        "cod": 200,
    }


@pytest.fixture
def forecast_payload() -> dict:
    """Ten three-hour samples for Valencia spanning two UTC days.

    Samples 0-2 are clear, 3-7 cloudy and 8-9 rainy. Only samples 2, 8 and 9
    carry a precipitation probability.
    """
    pops = {2: 0.2, 8: 0.55, 9: 0.3}
    items = []
    for i in range(10):
        if i < 3:
            condition = {"id": 800, "main": "Clear", "description": "clear sky", "icon": "01n"}
        elif i < 8:
            condition = {"id": 802, "main": "Clouds", "description": "scattered clouds", "icon": "03d"}
        else:
            condition = {"id": 500, "main": "Rain", "description": "light rain", "icon": "10n"}
        item = {
            "dt": FORECAST_START + i * 10800,
            "main": {
                "temp": 10.0 + i,
                "feels_like": 9.0 + i,
                "temp_min": 9.0 + i,
                "temp_max": 11.0 + i,
                "pressure": 1018,
                "sea_level": 1018,
                "grnd_level": 1015,
                "humidity": 70,
                "temp_kf": 0,
            },
            "weather": [condition],
            "clouds": {"all": 40},
            "wind": {"speed": 2.1, "deg": 90, "gust": 3.0},
            "visibility": 10000,
            "pop": pops.get(i, 0),
            "sys": {"pod": "n"},
            "dt_txt": "",
        }
        if i >= 8:
            item["rain"] = {"3h": 0.4}
        items.append(item)

    return {
        "cod": "200",
        "message": 0,
        "cnt": len(items),
        "list": items,
        "city": {
            "id": 2509954,
            "name": "Valencia",
            "coord": {"lat": 39.4739, "lon": -0.3797},
            "country": "ES",
            "population": 814208,
            "timezone": 0,
            "sunrise": 1699944000,
            "sunset": 1699980000,
        },
    }


@pytest.fixture
def ip_payload() -> dict:
    """Successful ip-api.com lookup for a Mountain View address."""
    return {
        "query": "8.8.8.8",
        "status": "success",
        "country": "United States",
        "countryCode": "US",
        "region": "CA",
        "regionName": "California",
        "city": "Mountain View",
        "zip": "94043",
        "lat": 37.4056,
        "lon": -122.0775,
        "timezone": "America/Los_Angeles",
        "isp": "Google LLC",
        "org": "Google Public DNS",
        "as": "AS15169 Google LLC",
    }
