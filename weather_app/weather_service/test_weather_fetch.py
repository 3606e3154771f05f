import asyncio

import httpx
import pytest

from weather_app.fakes import make_weather_payload, mock_client
from weather_app.weather_service.weather import (
    DecodingError,
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
    WeatherService,
    build_request_url,
)


def make_service(handler, **kwargs):
    kwargs.setdefault("base_url", "https://api.example.com/v1")
    kwargs.setdefault("api_key", "secret")
    return WeatherService(mock_client(handler), **kwargs)


def test_fetch_builds_forecast_request(weather_payload):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=weather_payload)

    asyncio.run(make_service(handler).fetch("Rome"))

    url = requests[0].url
    assert url.scheme == "https"
    assert url.path == "/v1/forecast.json"
    assert dict(url.params) == {
        "key": "secret",
        "q": "Rome",
        "days": "3",
        "aqi": "no",
        "alerts": "no",
    }


def test_fetch_decodes_snapshot(weather_payload):
    service = make_service(lambda request: httpx.Response(200, json=weather_payload))
    snapshot = asyncio.run(service.fetch("Rome"))

    assert snapshot.location.name == "Rome"
    assert snapshot.location.country == "Italy"
    assert snapshot.location.tz_id == "Europe/Rome"
    assert len(snapshot.forecast.forecastday) == 3
    assert len(snapshot.forecast.forecastday[0].hour) == 24
    assert snapshot.current.is_day is True
    assert snapshot.current.condition.icon_url == (
        "https://cdn.weatherapi.com/weather/64x64/day/113.png"
    )


def test_empty_query_uses_default_location(weather_payload):
    queries = []

    def handler(request):
        queries.append(request.url.params["q"])
        return httpx.Response(200, json=weather_payload)

    service = make_service(handler, default_location="Rome")
    asyncio.run(service.fetch("   "))
    assert queries == ["Rome"]


def test_coordinate_query_is_passed_verbatim(weather_payload):
    queries = []

    def handler(request):
        queries.append(request.url.params["q"])
        return httpx.Response(200, json=weather_payload)

    asyncio.run(make_service(handler).fetch("41.9,12.48"))
    assert queries == ["41.9,12.48"]


@pytest.mark.parametrize("status_code", [400, 403, 500, 503])
def test_non_2xx_is_invalid_response(status_code):
    service = make_service(lambda request: httpx.Response(status_code, json={}))
    with pytest.raises(InvalidResponseError) as exc_info:
        asyncio.run(service.fetch("Rome"))
    assert exc_info.value.status_code == status_code


def test_transport_failure_is_network_error():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(NetworkError) as exc_info:
        asyncio.run(make_service(handler).fetch("Rome"))
    assert isinstance(exc_info.value.__cause__, httpx.ConnectTimeout)
    assert exc_info.value.description.startswith("Network error")


def test_schema_mismatch_is_decoding_error(weather_payload):
    del weather_payload["current"]["temp_c"]
    service = make_service(lambda request: httpx.Response(200, json=weather_payload))
    with pytest.raises(DecodingError) as exc_info:
        asyncio.run(service.fetch("Rome"))
    assert exc_info.value.__cause__ is not None


def test_non_json_body_is_decoding_error():
    service = make_service(lambda request: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(DecodingError):
        asyncio.run(service.fetch("Rome"))


def test_malformed_base_url_is_invalid_url():
    service = make_service(lambda request: httpx.Response(200), base_url="weatherapi")
    with pytest.raises(InvalidURLError, match="Invalid URL"):
        asyncio.run(service.fetch("Rome"))


def test_build_request_url_strips_trailing_slash():
    url = build_request_url("https://api.example.com/v1/", "/search.json", {"q": "Rome"})
    assert str(url) == "https://api.example.com/v1/search.json?q=Rome"


def test_snapshot_for_other_city():
    payload = make_weather_payload(name="Oslo", country="Norway", lat=59.91, lon=10.75)
    service = make_service(lambda request: httpx.Response(200, json=payload))
    snapshot = asyncio.run(service.fetch("Oslo"))
    assert (snapshot.location.name, snapshot.location.lat) == ("Oslo", 59.91)
