"""Health checks for the key-value store and the external weather API."""

import httpx
from redis.exceptions import RedisError

from weather_app import config
from weather_app.logging_config import logger
from weather_app.models.health import ServiceStatus
from weather_app.storage.kv_store import redis_client


def is_store_available() -> ServiceStatus:
    """Check Redis connectivity.

    Returns:
        ServiceStatus.available when Redis responds, else not_available.
    """
    try:
        redis_client.ping()
    except RedisError as exc:
        logger.error("STORE_UNAVAILABLE", error=str(exc))
        return ServiceStatus.not_available
    return ServiceStatus.available


async def is_weather_api_available() -> bool:
    """Check the external weather API for availability.

    Returns:
        True if the search endpoint answers with a JSON list.
    """
    try:
        async with httpx.AsyncClient(timeout=5) as client:
            response = await client.get(
                config.WEATHER_API_BASE_URL + config.SEARCH_ENDPOINT,
                params={"key": config.WEATHER_API_KEY, "q": config.DEFAULT_LOCATION},
            )
            return response.status_code == 200 and isinstance(response.json(), list)
    except (httpx.HTTPError, ValueError) as exc:
        logger.error("WEATHER_API_UNAVAILABLE", error=str(exc))
        return False
