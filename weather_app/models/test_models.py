import pytest
from pydantic import ValidationError

from weather_app.fakes import make_weather_payload
from weather_app.models.favorite_city import FavoriteCity
from weather_app.models.location import GeocodingResult, LocationSuggestion
from weather_app.models.weather import Condition, Location, WeatherSnapshot


def test_condition_icon_url_rewrites_scheme_relative_reference():
    condition = Condition(text="Sunny", icon="//cdn.weatherapi.com/weather/64x64/day/113.png", code=1000)
    assert condition.icon_url == "https://cdn.weatherapi.com/weather/64x64/day/113.png"


def test_condition_icon_url_edge_cases():
    assert Condition(text="Sunny", icon="", code=1000).icon_url is None
    assert Condition(text="Sunny", icon="https://x/y.png", code=1000).icon_url == "https://x/y.png"


def test_localtime_formatted():
    location = WeatherSnapshot.model_validate(make_weather_payload()).location
    assert location.localtime_formatted == "Monday, 24 March, 13:40"


def test_localtime_formatted_falls_back_to_raw():
    location = Location(
        name="Rome", region="Lazio", country="Italy", lat=41.9, lon=12.48,
        tz_id="Europe/Rome", localtime_epoch=0, localtime="soon",
    )
    assert location.localtime_formatted == "soon"


def test_snapshot_is_immutable():
    snapshot = WeatherSnapshot.model_validate(make_weather_payload())
    with pytest.raises(ValidationError):
        snapshot.location = snapshot.location


def test_suggestion_equality_ignores_local_id():
    first = LocationSuggestion(name="Rome", country="Italy", latitude=41.9, longitude=12.48)
    second = LocationSuggestion(name="Rome", country="Italy", latitude=41.9, longitude=12.48)
    assert first.id != second.id
    assert first == second
    assert len({first, second}) == 1


def test_geocoding_result_to_suggestion():
    result = GeocodingResult(
        id=1, name="Lisbon", region="Lisboa", country="Portugal", lat=38.72, lon=-9.13, url="lisbon"
    )
    suggestion = result.to_suggestion()
    assert suggestion.display_name == "Lisbon, Portugal"
    assert suggestion.region == "Lisboa"


def test_favorite_city_value_identity():
    suggestion = LocationSuggestion(name="Rome", country="Italy", latitude=41.9, longitude=12.48)
    snapshot = WeatherSnapshot.model_validate(make_weather_payload())

    from_suggestion = FavoriteCity.from_suggestion(suggestion)
    from_snapshot = FavoriteCity.from_snapshot(snapshot)

    assert from_suggestion == from_snapshot
    assert hash(from_suggestion) == hash(from_snapshot)
    assert from_snapshot.id == "Rome-Italy-41.9-12.48"
    assert from_snapshot.coordinates == "41.9,12.48"
    assert from_snapshot.matches(suggestion)
