"""Persisted, published list of favorite cities."""

from pydantic import TypeAdapter, ValidationError

from weather_app.config import FAVORITE_CITIES_KEY
from weather_app.logging_config import logger
from weather_app.models.favorite_city import FavoriteCity
from weather_app.observable import Publisher
from weather_app.storage.kv_store import KeyValueStore

favorite_cities_adapter = TypeAdapter(list[FavoriteCity])


class FavoritesStore:
    """CRUD over the favorites list with value-based de-duplication.

    Each mutation persists the new list first and publishes it only once the
    write succeeded, so subscribers never see a state that was not saved.
    """

    def __init__(self, store: KeyValueStore, key: str = FAVORITE_CITIES_KEY):
        self.store = store
        self.key = key
        self.publisher: Publisher[list[FavoriteCity]] = Publisher(self._load())

    @property
    def favorites(self) -> list[FavoriteCity]:
        return list(self.publisher.value)

    def add(self, city: FavoriteCity) -> bool:
        """Add a favorite.

        Args:
            city: City to bookmark.

        Returns:
            False if an equal favorite exists or the write failed, else True.
        """
        cities = self.favorites
        if city in cities:
            logger.info("FAVORITE_ALREADY_PRESENT", city=city.id)
            return False
        cities.append(city)
        return self._commit(cities)

    def remove(self, city: FavoriteCity) -> bool:
        """Remove every favorite equal to ``city``.

        Returns:
            Whether the resulting list was persisted. Removing an absent city
            still persists and returns True.
        """
        cities = [existing for existing in self.favorites if existing != city]
        return self._commit(cities)

    def is_favorite(self, city: FavoriteCity) -> bool:
        return city in self.publisher.value

    def is_favorite_named(self, name: str, country: str) -> bool:
        return any(
            city.name == name and city.country == country
            for city in self.publisher.value
        )

    def clear(self) -> bool:
        return self._commit([])

    def _commit(self, cities: list[FavoriteCity]) -> bool:
        try:
            blob = favorite_cities_adapter.dump_json(cities).decode()
        except (TypeError, ValueError) as exc:
            logger.error("FAVORITES_ENCODE_FAILED", error=str(exc))
            return False
        if not self.store.set(self.key, blob):
            logger.error("FAVORITES_SAVE_FAILED", count=len(cities))
            return False
        self.publisher.send(cities)
        return True

    def _load(self) -> list[FavoriteCity]:
        blob = self.store.get(self.key)
        if blob is None:
            return []
        try:
            return favorite_cities_adapter.validate_json(blob)
        except ValidationError as exc:
            logger.error("FAVORITES_LOAD_FAILED", error=str(exc))
            return []
