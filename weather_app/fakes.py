"""Payload builders and fake collaborators shared by the tests."""

import httpx
from redis.exceptions import ConnectionError as RedisConnectionError

from weather_app.location_service.device import AuthorizationStatus, DeviceLocationProvider
from weather_app.models.location import Coordinate


def make_condition(text="Sunny", code=1000, day=True):
    period = "day" if day else "night"
    return {
        "text": text,
        "icon": f"//cdn.weatherapi.com/weather/64x64/{period}/113.png",
        "code": code,
    }


def make_hour(date: str, hour: int):
    return {
        "time_epoch": 1742774400 + hour * 3600,
        "time": f"{date} {hour:02d}:00",
        "temp_c": 10.0 + hour / 2,
        "feelslike_c": 9.0 + hour / 2,
        "humidity": 70,
        "wind_kph": 8.3,
        "wind_dir": "NE",
        "chance_of_rain": 10,
        "is_day": 1 if 6 <= hour < 19 else 0,
        "condition": make_condition(),
    }


def make_weather_payload(
    name="Rome", country="Italy", lat=41.9, lon=12.48, days=3, hours=24
):
    dates = [f"2025-03-{24 + offset}" for offset in range(days)]
    return {
        "location": {
            "name": name,
            "region": "Lazio",
            "country": country,
            "lat": lat,
            "lon": lon,
            "tz_id": "Europe/Rome",
            "localtime_epoch": 1742820000,
            "localtime": "2025-03-24 13:40",
        },
        "current": {
            "last_updated": "2025-03-24 13:30",
            "temp_c": 17.26,
            "feelslike_c": 16.04,
            "humidity": 55,
            "wind_kph": 11.16,
            "wind_dir": "WSW",
            "uv": 4.0,
            "is_day": 1,
            "condition": make_condition("Partly cloudy", 1003),
        },
        "forecast": {
            "forecastday": [
                {
                    "date": date,
                    "date_epoch": 1742774400 + index * 86400,
                    "day": {
                        "maxtemp_c": 18.4,
                        "mintemp_c": 9.1,
                        "avgtemp_c": 13.2,
                        "daily_chance_of_rain": 20 + index,
                        "uv": 3.5,
                        "condition": make_condition(),
                    },
                    "astro": {"sunrise": "06:09 AM", "sunset": "06:29 PM"},
                    "hour": [make_hour(date, hour) for hour in range(hours)],
                }
                for index, date in enumerate(dates)
            ]
        },
    }


def make_geocoding_payload():
    return [
        {
            "id": 2801268,
            "name": "London",
            "region": "City of London, Greater London",
            "country": "United Kingdom",
            "lat": 51.52,
            "lon": -0.11,
            "url": "london-city-of-london-greater-london-united-kingdom",
        },
        {
            "id": 315398,
            "name": "London",
            "region": "Ontario",
            "country": "Canada",
            "lat": 42.98,
            "lon": -81.25,
            "url": "london-ontario-canada",
        },
    ]


def mock_client(handler) -> httpx.AsyncClient:
    """Return an AsyncClient whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class FailingWrites:
    """Wraps a Redis client and fails writes while ``failing`` is set."""

    def __init__(self, client):
        self.client = client
        self.failing = False

    def get(self, key):
        return self.client.get(key)

    def set(self, key, value, **kwargs):
        if self.failing:
            raise RedisConnectionError("store unavailable")
        return self.client.set(key, value, **kwargs)

    def delete(self, key):
        if self.failing:
            raise RedisConnectionError("store unavailable")
        return self.client.delete(key)

    def ping(self):
        return self.client.ping()


class FakeLocationProvider(DeviceLocationProvider):
    """Scripted platform location provider."""

    def __init__(
        self,
        status=AuthorizationStatus.authorized_when_in_use,
        prompt_result=AuthorizationStatus.authorized_when_in_use,
        coordinate=Coordinate(latitude=41.9, longitude=12.48),
        enabled=True,
        fix_error=None,
    ):
        self.status = status
        self.prompt_result = prompt_result
        self.coordinate = coordinate
        self.enabled = enabled
        self.fix_error = fix_error
        self.prompts = 0
        self.fixes = 0

    def services_enabled(self):
        return self.enabled

    def authorization_status(self):
        return self.status

    async def request_permission(self):
        self.prompts += 1
        self.status = self.prompt_result
        return self.prompt_result

    async def request_one_shot_location(self):
        self.fixes += 1
        if self.fix_error is not None:
            raise self.fix_error
        return self.coordinate
