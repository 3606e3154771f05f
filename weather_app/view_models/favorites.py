"""Favorites view-model reconciling the favorites list with the current snapshot."""

from weather_app.logging_config import logger
from weather_app.models.favorite_city import FavoriteCity
from weather_app.models.location import LocationSuggestion
from weather_app.models.weather import WeatherSnapshot
from weather_app.storage.favorites import FavoritesStore
from weather_app.view_models.weather import WeatherViewModel


class FavoritesViewModel:
    """Keeps ``is_current_city_favorited`` in step with both sources.

    The flag is recomputed whenever the store publishes a new list and
    whenever the weather view-model publishes a new snapshot.
    """

    def __init__(self, store: FavoritesStore, weather: WeatherViewModel):
        self.store = store
        self.weather = weather
        self.favorite_cities: list[FavoriteCity] = []
        self.is_current_city_favorited = False
        self.error_message: str | None = None
        self._subscriptions = [
            store.publisher.subscribe(self._on_favorites),
            weather.weather_data.subscribe(self._on_snapshot),
        ]

    def _on_favorites(self, cities: list[FavoriteCity]) -> None:
        self.favorite_cities = list(cities)
        self.check_current_city_favorite_status()

    def _on_snapshot(self, snapshot: WeatherSnapshot | None) -> None:
        self.check_current_city_favorite_status()

    def current_city(self) -> FavoriteCity | None:
        """Favorite candidate built from the loaded snapshot, if any."""
        snapshot = self.weather.snapshot
        if snapshot is None:
            return None
        return FavoriteCity.from_snapshot(snapshot)

    def check_current_city_favorite_status(self) -> bool:
        current = self.current_city()
        self.is_current_city_favorited = current is not None and current in self.favorite_cities
        return self.is_current_city_favorited

    def add_favorite_city(self, city: FavoriteCity) -> bool:
        added = self.store.add(city)
        if not added and not self.store.is_favorite(city):
            self.error_message = "Unable to save the city to favorites."
        self.check_current_city_favorite_status()
        return added

    def add_favorite_from_suggestion(self, suggestion: LocationSuggestion) -> bool:
        return self.add_favorite_city(FavoriteCity.from_suggestion(suggestion))

    def remove_favorite_city(self, city: FavoriteCity) -> bool:
        removed = self.store.remove(city)
        if not removed:
            self.error_message = "Unable to remove the city from favorites."
        self.check_current_city_favorite_status()
        return removed

    def toggle_current_city_favorite(self) -> bool:
        """Add or remove the displayed location.

        Returns:
            Whether the displayed location is a favorite afterwards; False
            when no snapshot is loaded.
        """
        current = self.current_city()
        if current is None:
            return False
        if current in self.favorite_cities:
            logger.info("FAVORITE_TOGGLE_OFF", city=current.id)
            self.remove_favorite_city(current)
        else:
            logger.info("FAVORITE_TOGGLE_ON", city=current.id)
            self.add_favorite_city(current)
        return self.is_current_city_favorited

    def clear_favorites(self) -> bool:
        cleared = self.store.clear()
        if not cleared:
            self.error_message = "Unable to remove all favorites."
        self.check_current_city_favorite_status()
        return cleared

    def is_city_favorite(self, name: str, country: str) -> bool:
        return self.store.is_favorite_named(name, country)

    def is_suggestion_favorite(self, suggestion: LocationSuggestion) -> bool:
        return any(city.matches(suggestion) for city in self.favorite_cities)

    async def select_city(self, city: FavoriteCity) -> WeatherSnapshot | None:
        """Show the weather for a favorite, looked up by its coordinates."""
        self.weather.search_location = city.coordinates
        return await self.weather.search()

    def close(self) -> None:
        for subscription in self._subscriptions:
            subscription.cancel()
        self._subscriptions = []
