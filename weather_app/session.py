"""Wires services, stores and view-models around one key-value store."""

import httpx

from weather_app.location_service.device import DeviceLocationProvider, DeviceLocationService
from weather_app.location_service.search import LocationSearchService
from weather_app.storage.favorites import FavoritesStore
from weather_app.storage.kv_store import KeyValueStore
from weather_app.storage.recents import recent_locations_store, recent_searches_store
from weather_app.view_models.favorites import FavoritesViewModel
from weather_app.view_models.search import LocationSearchViewModel
from weather_app.view_models.weather import WeatherViewModel
from weather_app.weather_service.weather import WeatherService


class AppSession:
    """One user's client state: the stores and the view-models built on them."""

    def __init__(
        self,
        store: KeyValueStore,
        client: httpx.AsyncClient | None = None,
        location_provider: DeviceLocationProvider | None = None,
    ):
        self.store = store
        self.weather_service = WeatherService(client)
        self.search_service = LocationSearchService(client)
        self.favorites_store = FavoritesStore(store)
        device_location = (
            DeviceLocationService(location_provider) if location_provider is not None else None
        )
        self.weather = WeatherViewModel(self.weather_service, recent_locations_store(store))
        self.search = LocationSearchViewModel(
            self.search_service, recent_searches_store(store), device_location
        )
        self.favorites = FavoritesViewModel(self.favorites_store, self.weather)

    def close(self) -> None:
        self.favorites.close()
        self.search.close()
