"""Weather fetch service: request building, transport and decoding."""

import httpx
from pydantic import ValidationError

from weather_app import config
from weather_app.logging_config import logger
from weather_app.models.weather import WeatherSnapshot


class WeatherServiceError(Exception):
    """Base exception for weather fetch failures."""

    @property
    def description(self) -> str:
        """Human-readable message suitable for display."""
        return str(self)


class InvalidURLError(WeatherServiceError):
    """Raised when the request cannot be expressed as a well-formed URL."""

    def __init__(self, message: str = "Invalid URL."):
        super().__init__(message)


class NetworkError(WeatherServiceError):
    """Raised when the transport cannot complete the exchange."""


class InvalidResponseError(WeatherServiceError):
    """Raised when the server answers with a non-2xx status."""

    def __init__(self, status_code: int):
        super().__init__(f"Invalid response from server (HTTP {status_code}).")
        self.status_code = status_code


class DecodingError(WeatherServiceError):
    """Raised when the response body does not match the expected schema."""


def build_request_url(base_url: str, endpoint: str, params: dict) -> httpx.URL:
    """Build an absolute http(s) URL for an API endpoint.

    Args:
        base_url: API base, e.g. ``https://api.weatherapi.com/v1``.
        endpoint: Endpoint path starting with ``/``.
        params: Query parameters.

    Returns:
        The request URL.

    Raises:
        InvalidURLError: If the result is not an absolute http(s) URL.
    """
    try:
        url = httpx.URL(base_url.rstrip("/") + endpoint, params=params)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise InvalidURLError() from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidURLError()
    return url


class WeatherService:
    """Fetches and decodes forecast snapshots.

    Every call is a fresh request: there is no caching and no retry, callers
    decide whether to try again.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        base_url: str = config.WEATHER_API_BASE_URL,
        api_key: str = config.WEATHER_API_KEY,
        days: int = config.FORECAST_DAYS,
        default_location: str = config.DEFAULT_LOCATION,
        timeout: float = config.HTTP_TIMEOUT_S,
    ):
        self.client = client
        self.base_url = base_url
        self.api_key = api_key
        self.days = days
        self.default_location = default_location
        self.timeout = timeout

    def forecast_url(self, location_query: str) -> httpx.URL:
        return build_request_url(
            self.base_url,
            config.FORECAST_ENDPOINT,
            {
                "key": self.api_key,
                "q": location_query,
                "days": self.days,
                "aqi": "no",
                "alerts": "no",
            },
        )

    async def fetch(self, location_query: str) -> WeatherSnapshot:
        """Fetch the forecast snapshot for a query.

        Args:
            location_query: Free text, a ``"lat,lon"`` pair, or empty for the
                default location.

        Returns:
            The decoded WeatherSnapshot.

        Raises:
            InvalidURLError: If the request URL is malformed.
            NetworkError: If the transport fails.
            InvalidResponseError: If the status is outside 200-299.
            DecodingError: If the body does not match the snapshot schema.
        """
        query = location_query.strip() or self.default_location
        url = self.forecast_url(query)
        logger.info("WEATHER_REQUEST", query=query, days=self.days)
        try:
            response = await self._get(url)
        except httpx.RequestError as exc:
            logger.error("WEATHER_REQUEST_FAILED", query=query, error=str(exc))
            raise NetworkError(f"Network error: {exc}") from exc

        logger.info("WEATHER_RESPONSE", query=query, status=response.status_code)
        if not response.is_success:
            logger.error("WEATHER_BAD_STATUS", query=query, status=response.status_code)
            raise InvalidResponseError(response.status_code)

        try:
            return WeatherSnapshot.model_validate_json(response.content)
        except ValidationError as exc:
            logger.error(
                "WEATHER_BAD_PAYLOAD", query=query, errors=exc.error_count()
            )
            raise DecodingError(f"Error decoding weather data: {exc}") from exc

    async def _get(self, url: httpx.URL) -> httpx.Response:
        if self.client is not None:
            return await self.client.get(url)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(url)
