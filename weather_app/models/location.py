"""Geocoding models: wire records and the suggestions built from them."""

from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class GeocodingResult(BaseModel):
    """One record of the search endpoint response."""

    id: int
    name: str
    region: str
    country: str
    lat: float
    lon: float
    url: str

    def to_suggestion(self) -> "LocationSuggestion":
        """Build a suggestion with a freshly generated local id."""
        return LocationSuggestion(
            name=self.name,
            region=self.region,
            country=self.country,
            latitude=self.lat,
            longitude=self.lon,
        )


class LocationSuggestion(BaseModel):
    """A candidate locality offered to the user while searching.

    The ``id`` only tells list rows apart; two suggestions with the same
    place data compare equal whatever their ids.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    country: str
    latitude: float
    longitude: float
    region: str = ""
    id: UUID = Field(default_factory=uuid4)

    @property
    def display_name(self) -> str:
        return f"{self.name}, {self.country}"

    @property
    def coordinates(self) -> str:
        return f"{self.latitude},{self.longitude}"

    @property
    def place_key(self) -> tuple[str, str, float, float]:
        return (self.name, self.country, self.latitude, self.longitude)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocationSuggestion):
            return NotImplemented
        return self.place_key == other.place_key

    def __hash__(self) -> int:
        return hash(self.place_key)


class Coordinate(BaseModel):
    """Latitude/longitude pair reported by the device."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float

    @property
    def query(self) -> str:
        return f"{self.latitude},{self.longitude}"
