"""Weather snapshot models decoded from the forecast endpoint."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

LOCALTIME_FORMAT = "%Y-%m-%d %H:%M"


class WeatherModel(BaseModel):
    """Base for immutable weather payload models."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class Condition(WeatherModel):
    """Condition label, icon reference and numeric code."""

    text: str
    icon: str
    code: int

    @property
    def icon_url(self) -> str | None:
        """Return the icon as an absolute https URL.

        The API returns scheme-relative references such as
        ``//cdn.weatherapi.com/weather/64x64/day/113.png``.
        """
        if not self.icon:
            return None
        if self.icon.startswith("//"):
            return f"https:{self.icon}"
        return self.icon


class Location(WeatherModel):
    """Resolved location metadata for a snapshot."""

    name: str
    region: str
    country: str
    lat: float
    lon: float
    tz_id: str
    localtime_epoch: int
    localtime: str

    @property
    def localtime_formatted(self) -> str:
        try:
            parsed = datetime.strptime(self.localtime, LOCALTIME_FORMAT)
        except ValueError:
            return self.localtime
        return f"{parsed:%A}, {parsed.day} {parsed:%B}, {parsed:%H:%M}"


class CurrentConditions(WeatherModel):
    temp_c: float
    feelslike_c: float
    humidity: int
    wind_kph: float
    wind_dir: str
    uv: float
    condition: Condition
    is_day: bool

    @property
    def is_daytime(self) -> bool:
        return self.is_day


class DayForecast(WeatherModel):
    maxtemp_c: float
    mintemp_c: float
    avgtemp_c: float
    daily_chance_of_rain: int
    condition: Condition
    uv: float = 0.0


class HourForecast(WeatherModel):
    time: str
    time_epoch: int
    temp_c: float
    feelslike_c: float
    humidity: int
    wind_kph: float
    wind_dir: str
    chance_of_rain: int
    is_day: bool
    condition: Condition


class ForecastDay(WeatherModel):
    date: str
    date_epoch: int
    day: DayForecast
    hour: tuple[HourForecast, ...] = ()


class Forecast(WeatherModel):
    forecastday: tuple[ForecastDay, ...] = Field(default_factory=tuple)


class WeatherSnapshot(WeatherModel):
    """Complete decoded result of one forecast fetch."""

    location: Location
    current: CurrentConditions
    forecast: Forecast
