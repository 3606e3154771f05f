"""Weather view-model: fetch lifecycle, recent locations, display accessors."""

from weather_app import config
from weather_app.logging_config import logger
from weather_app.models.state import LoadingState
from weather_app.models.weather import ForecastDay, HourForecast, WeatherSnapshot
from weather_app.observable import Publisher
from weather_app.storage.recents import RecentsStore
from weather_app.weather_service.weather import WeatherService, WeatherServiceError

NOT_AVAILABLE = config.NOT_AVAILABLE


class WeatherViewModel:
    """Owns the current snapshot and the fetch lifecycle.

    ``Idle -> Loading -> Loaded | Error``; any new fetch re-enters Loading.
    A failed fetch leaves the previous snapshot in place. Only the most
    recent request may deliver: older overlapping responses are dropped.
    """

    def __init__(
        self,
        service: WeatherService,
        recent_locations: RecentsStore[str],
        default_location: str = config.DEFAULT_LOCATION,
    ):
        self.service = service
        self.recent_locations_store = recent_locations
        self.weather_data: Publisher[WeatherSnapshot | None] = Publisher(None)
        self.loading_state: Publisher[LoadingState] = Publisher(LoadingState.idle())
        self.search_location = default_location
        self.error_message: str | None = None
        self._request_token = 0

    @property
    def snapshot(self) -> WeatherSnapshot | None:
        return self.weather_data.value

    async def fetch_weather(self, location: str) -> WeatherSnapshot | None:
        """Fetch weather for ``location`` and publish the outcome.

        Returns:
            The new snapshot, or None if the fetch failed or was superseded.
        """
        self._request_token += 1
        token = self._request_token
        self.error_message = None
        self.loading_state.send(LoadingState.loading())
        try:
            snapshot = await self.service.fetch(location)
        except WeatherServiceError as exc:
            if token != self._request_token:
                logger.info("WEATHER_STALE_DISCARDED", query=location)
                return None
            logger.warning("WEATHER_FETCH_FAILED", query=location, error=exc.description)
            self.loading_state.send(LoadingState.error(exc.description))
            return None

        if token != self._request_token:
            logger.info("WEATHER_STALE_DISCARDED", query=location)
            return None
        self.weather_data.send(snapshot)
        self.loading_state.send(LoadingState.loaded())
        if not self.recent_locations_store.add(snapshot.location.name):
            self.error_message = "Unable to save the recent location."
        return snapshot

    async def search(self) -> WeatherSnapshot | None:
        return await self.fetch_weather(self.search_location)

    @property
    def recent_locations(self) -> list[str]:
        return self.recent_locations_store.items

    def clear_recent_locations(self) -> bool:
        if not self.recent_locations_store.clear():
            self.error_message = "Unable to clear the recent locations."
            return False
        return True

    @property
    def current_temperature(self) -> str:
        if self.snapshot is None:
            return NOT_AVAILABLE
        return f"{self.snapshot.current.temp_c:.1f}°C"

    @property
    def feels_like_temperature(self) -> str:
        if self.snapshot is None:
            return NOT_AVAILABLE
        return f"{self.snapshot.current.feelslike_c:.1f}°C"

    @property
    def current_condition(self) -> str:
        if self.snapshot is None:
            return NOT_AVAILABLE
        return self.snapshot.current.condition.text

    @property
    def current_condition_icon_url(self) -> str | None:
        if self.snapshot is None:
            return None
        return self.snapshot.current.condition.icon_url

    @property
    def is_daytime(self) -> bool:
        if self.snapshot is None:
            return True
        return self.snapshot.current.is_daytime

    @property
    def humidity(self) -> str:
        if self.snapshot is None:
            return NOT_AVAILABLE
        return f"{self.snapshot.current.humidity}%"

    @property
    def wind_speed(self) -> str:
        if self.snapshot is None:
            return NOT_AVAILABLE
        return f"{self.snapshot.current.wind_kph:.1f} km/h"

    @property
    def wind_direction(self) -> str:
        if self.snapshot is None:
            return NOT_AVAILABLE
        return self.snapshot.current.wind_dir

    @property
    def chance_of_rain(self) -> str:
        """Today's chance of rain."""
        if not self.forecast_days:
            return NOT_AVAILABLE
        return f"{self.forecast_days[0].day.daily_chance_of_rain}%"

    @property
    def uv_index(self) -> str:
        if self.snapshot is None:
            return NOT_AVAILABLE
        return f"{self.snapshot.current.uv:.1f}"

    @property
    def local_time(self) -> str:
        if self.snapshot is None:
            return NOT_AVAILABLE
        return self.snapshot.location.localtime_formatted

    @property
    def forecast_days(self) -> list[ForecastDay]:
        if self.snapshot is None:
            return []
        return list(self.snapshot.forecast.forecastday)

    @property
    def hourly_forecast(self) -> list[HourForecast]:
        """Hourly records for today."""
        if not self.forecast_days:
            return []
        return list(self.forecast_days[0].hour)
