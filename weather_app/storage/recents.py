"""Bounded most-recent-first lists persisted as JSON."""

from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from weather_app import config
from weather_app.logging_config import logger
from weather_app.models.location import LocationSuggestion
from weather_app.observable import Publisher
from weather_app.storage.kv_store import KeyValueStore

T = TypeVar("T")


class RecentsStore(Generic[T]):
    """Most-recent-first list capped at ``limit`` entries.

    Entries are de-duplicated by ``dedupe_key``: re-adding an existing entry
    moves it to the front. Overflow is evicted from the tail.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        adapter: TypeAdapter,
        dedupe_key: Callable[[T], Hashable],
        limit: int = config.RECENTS_LIMIT,
    ):
        self.store = store
        self.key = key
        self.adapter = adapter
        self.dedupe_key = dedupe_key
        self.limit = limit
        self.publisher: Publisher[list[T]] = Publisher(self._load())

    @property
    def items(self) -> list[T]:
        return list(self.publisher.value)

    def add(self, item: T) -> bool:
        """Insert ``item`` at the head.

        Returns:
            Whether the new list was persisted; on failure nothing changes.
        """
        key = self.dedupe_key(item)
        items = [existing for existing in self.publisher.value if self.dedupe_key(existing) != key]
        items.insert(0, item)
        return self._commit(items[: self.limit])

    def clear(self) -> bool:
        return self._commit([])

    def _commit(self, items: list[T]) -> bool:
        try:
            blob = self.adapter.dump_json(items).decode()
        except (TypeError, ValueError) as exc:
            logger.error("RECENTS_ENCODE_FAILED", key=self.key, error=str(exc))
            return False
        if not self.store.set(self.key, blob):
            logger.error("RECENTS_SAVE_FAILED", key=self.key)
            return False
        self.publisher.send(items)
        return True

    def _load(self) -> list[T]:
        blob = self.store.get(self.key)
        if blob is None:
            return []
        try:
            items = self.adapter.validate_json(blob)
        except ValidationError as exc:
            logger.error("RECENTS_LOAD_FAILED", key=self.key, error=str(exc))
            return []
        return items[: self.limit]


def suggestion_key(suggestion: LocationSuggestion) -> tuple[str, str]:
    return (suggestion.name, suggestion.country)


def location_name_key(name: str) -> str:
    return name.casefold()


def recent_searches_store(store: KeyValueStore) -> RecentsStore[LocationSuggestion]:
    """Recently selected suggestions, unique by (name, country)."""
    return RecentsStore(
        store,
        config.RECENT_SEARCHES_KEY,
        TypeAdapter(list[LocationSuggestion]),
        suggestion_key,
    )


def recent_locations_store(store: KeyValueStore) -> RecentsStore[str]:
    """Resolved location names, unique ignoring case."""
    return RecentsStore(
        store,
        config.RECENT_LOCATIONS_KEY,
        TypeAdapter(list[str]),
        location_name_key,
    )
