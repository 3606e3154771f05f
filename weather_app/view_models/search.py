"""Search view-model: debounced suggestions, device location, recent searches."""

from weather_app import config
from weather_app.location_service.debounce import Debouncer
from weather_app.location_service.device import (
    DeviceLocationService,
    LocationDisabledError,
    LocationError,
)
from weather_app.location_service.search import LocationSearchError, LocationSearchService
from weather_app.logging_config import logger
from weather_app.models.location import Coordinate, LocationSuggestion
from weather_app.observable import Publisher
from weather_app.storage.recents import RecentsStore


class LocationSearchViewModel:
    """Turns search text into suggestion lists.

    Setting ``search_text`` restarts the quiet-period countdown; only the
    settled text is looked up, and only when it differs from the last settled
    text. Text shorter than ``min_length`` clears the suggestions instead.
    Must be driven from a running event loop.
    """

    def __init__(
        self,
        service: LocationSearchService,
        recent_searches: RecentsStore[LocationSuggestion],
        device_location: DeviceLocationService | None = None,
        *,
        quiet_period: float = config.SEARCH_DEBOUNCE_S,
        min_length: int = config.MIN_SEARCH_LENGTH,
    ):
        self.service = service
        self.recent_searches_store = recent_searches
        self.device_location = device_location
        self.min_length = min_length
        self.suggestions: Publisher[list[LocationSuggestion]] = Publisher([])
        self.is_searching = False
        self.error_message: str | None = None
        self._search_text = ""
        self._request_token = 0
        self.debouncer: Debouncer[str] = Debouncer(quiet_period, self._on_settled)

    @property
    def search_text(self) -> str:
        return self._search_text

    @search_text.setter
    def search_text(self, text: str) -> None:
        self._search_text = text
        self.debouncer.push(text)

    async def _on_settled(self, text: str) -> None:
        if len(text.strip()) < self.min_length:
            self._clear_suggestions()
            return
        await self.fetch_suggestions(text)

    def _clear_suggestions(self) -> None:
        # Lookups still in flight must not repopulate the cleared list.
        self._request_token += 1
        self.is_searching = False
        self.suggestions.send([])

    async def fetch_suggestions(self, query: str) -> None:
        """Look up ``query`` immediately, bypassing the quiet period.

        On failure the previous suggestions are kept and ``error_message``
        is set. Responses to superseded lookups are discarded.
        """
        if not query.strip():
            self._clear_suggestions()
            return

        self._request_token += 1
        token = self._request_token
        self.is_searching = True
        try:
            results = await self.service.search(query)
        except LocationSearchError as exc:
            if token == self._request_token:
                self.error_message = exc.description
            return
        finally:
            if token == self._request_token:
                self.is_searching = False

        if token != self._request_token:
            logger.info("LOCATION_SEARCH_STALE_DISCARDED", query=query)
            return
        self.error_message = None
        self.suggestions.send(results)

    async def get_current_location(self) -> Coordinate | None:
        """Resolve the device position and feed it into the search text."""
        if self.device_location is None:
            self.error_message = LocationDisabledError().description
            return None
        try:
            coordinate = await self.device_location.request_location()
        except LocationError as exc:
            self.error_message = exc.description
            return None
        self.search_text = coordinate.query
        return coordinate

    @property
    def recent_searches(self) -> list[LocationSuggestion]:
        return self.recent_searches_store.items

    def record_search(self, suggestion: LocationSuggestion) -> bool:
        if not self.recent_searches_store.add(suggestion):
            self.error_message = "Unable to save the recent search."
            return False
        return True

    def clear_recent_searches(self) -> bool:
        if not self.recent_searches_store.clear():
            self.error_message = "Unable to clear the recent searches."
            return False
        return True

    async def wait_idle(self) -> None:
        """Wait for the pending countdown and the lookup it triggers."""
        await self.debouncer.flush()

    def close(self) -> None:
        self.debouncer.cancel()
