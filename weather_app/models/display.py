"""Display payloads returned by the HTTP surface."""

from pydantic import BaseModel

from weather_app.models.favorite_city import FavoriteCity
from weather_app.models.location import LocationSuggestion
from weather_app.models.weather import ForecastDay, Location


class WeatherDisplay(BaseModel):
    """Formatted fields for the currently displayed location."""

    location: Location
    local_time: str
    temperature: str
    feels_like: str
    condition: str
    icon_url: str | None
    is_daytime: bool
    humidity: str
    wind_speed: str
    wind_direction: str
    chance_of_rain: str
    uv_index: str
    is_favorite: bool
    forecast: list[ForecastDay]


class FavoriteToggle(BaseModel):
    city: FavoriteCity
    is_favorite: bool


class RecentsResponse(BaseModel):
    searches: list[LocationSuggestion]
    locations: list[str]
