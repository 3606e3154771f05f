"""Redis-backed key-value store for the persisted client state."""

from functools import partial

from redis import Redis
from redis.exceptions import RedisError

from weather_app import config
from weather_app.logging_config import logger

redis_client = Redis(
    host=config.REDIS_HOST,
    port=config.REDIS_PORT,
    db=config.REDIS_DB,
    decode_responses=True,
)


class KeyValueStore:
    """Get/set/delete of opaque serialized blobs keyed by string."""

    def __init__(self, client):
        self.redis_client = client

    def get(self, key: str) -> str | None:
        """Read a blob.

        Args:
            key: Storage key.

        Returns:
            The stored blob, or None if missing or the store is unreachable.
        """
        try:
            return self.redis_client.get(key)
        except RedisError as exc:
            logger.error("STORE_GET_FAILED", key=key, error=str(exc))
            return None

    def set(self, key: str, value: str) -> bool:
        """Write a blob.

        Args:
            key: Storage key.
            value: Serialized blob.

        Returns:
            True if the write was acknowledged by the store.
        """
        try:
            self.redis_client.set(key, value)
        except RedisError as exc:
            logger.error("STORE_SET_FAILED", key=key, error=str(exc))
            return False
        return True

    def delete(self, key: str) -> bool:
        try:
            self.redis_client.delete(key)
        except RedisError as exc:
            logger.error("STORE_DELETE_FAILED", key=key, error=str(exc))
            return False
        return True


key_value_store = partial(KeyValueStore, client=redis_client)
