"""Geocoding lookup turning free text into location suggestions."""

import httpx
from pydantic import TypeAdapter, ValidationError

from weather_app import config
from weather_app.logging_config import logger
from weather_app.models.location import GeocodingResult, LocationSuggestion
from weather_app.weather_service.weather import InvalidURLError, build_request_url

geocoding_results_adapter = TypeAdapter(list[GeocodingResult])


class LocationSearchError(Exception):
    """Raised when a geocoding lookup fails."""

    @property
    def description(self) -> str:
        return str(self)


class LocationSearchService:
    """Looks up locality suggestions on the search endpoint."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        base_url: str = config.WEATHER_API_BASE_URL,
        api_key: str = config.WEATHER_API_KEY,
        timeout: float = config.HTTP_TIMEOUT_S,
    ):
        self.client = client
        self.base_url = base_url
        self.api_key = api_key
        self.timeout = timeout

    async def search(self, query: str) -> list[LocationSuggestion]:
        """Return suggestions for ``query``.

        Args:
            query: Partial locality name or ``"lat,lon"`` pair.

        Returns:
            Suggestions in API order, each with a fresh local id.

        Raises:
            LocationSearchError: On malformed URL, transport failure,
                non-2xx status or an undecodable body.
        """
        try:
            url = build_request_url(
                self.base_url,
                config.SEARCH_ENDPOINT,
                {"key": self.api_key, "q": query},
            )
        except InvalidURLError as exc:
            raise LocationSearchError("Search error: invalid URL.") from exc

        logger.info("LOCATION_SEARCH_REQUEST", query=query)
        try:
            response = await self._get(url)
        except httpx.RequestError as exc:
            logger.error("LOCATION_SEARCH_REQUEST_FAILED", query=query, error=str(exc))
            raise LocationSearchError(f"Search error: {exc}") from exc

        logger.info("LOCATION_SEARCH_RESPONSE", query=query, status=response.status_code)
        if not response.is_success:
            logger.error("LOCATION_SEARCH_BAD_STATUS", query=query, status=response.status_code)
            raise LocationSearchError(
                f"Search error: server answered HTTP {response.status_code}."
            )

        try:
            results = geocoding_results_adapter.validate_json(response.content)
        except ValidationError as exc:
            logger.error("LOCATION_SEARCH_BAD_PAYLOAD", query=query, errors=exc.error_count())
            raise LocationSearchError(f"Search error: {exc}") from exc
        return [result.to_suggestion() for result in results]

    async def _get(self, url: httpx.URL) -> httpx.Response:
        if self.client is not None:
            return await self.client.get(url)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(url)
