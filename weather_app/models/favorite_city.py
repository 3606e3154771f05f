"""Bookmarked locality model."""

from pydantic import BaseModel, ConfigDict

from weather_app.models.location import LocationSuggestion
from weather_app.models.weather import WeatherSnapshot


class FavoriteCity(BaseModel):
    """A favorite identified by its (name, country, latitude, longitude)."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str
    latitude: float
    longitude: float

    @property
    def id(self) -> str:
        return f"{self.name}-{self.country}-{self.latitude}-{self.longitude}"

    @property
    def display_name(self) -> str:
        return f"{self.name}, {self.country}"

    @property
    def coordinates(self) -> str:
        return f"{self.latitude},{self.longitude}"

    @classmethod
    def from_suggestion(cls, suggestion: LocationSuggestion) -> "FavoriteCity":
        return cls(
            name=suggestion.name,
            country=suggestion.country,
            latitude=suggestion.latitude,
            longitude=suggestion.longitude,
        )

    @classmethod
    def from_snapshot(cls, snapshot: WeatherSnapshot) -> "FavoriteCity":
        """Build the favorite candidate for the location of a snapshot."""
        location = snapshot.location
        return cls(
            name=location.name,
            country=location.country,
            latitude=location.lat,
            longitude=location.lon,
        )

    def matches(self, suggestion: LocationSuggestion) -> bool:
        return (
            self.name == suggestion.name
            and self.country == suggestion.country
            and self.latitude == suggestion.latitude
            and self.longitude == suggestion.longitude
        )
