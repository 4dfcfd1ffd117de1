"""
Redis-backed key/value cache holding session tokens.
"""

import logging
from typing import Optional

import redis

logger = logging.getLogger(__name__)


class RedisCache:
    """Thin wrapper around a Redis client."""

    def __init__(
        self,
        redis_url: Optional[str] = None,
        redis_client: Optional[redis.Redis] = None,
        timeout_seconds: float = 5.0,
    ):
        assert redis_url or redis_client, "Either redis_url or redis_client must be defined."
        if redis_client is not None:
            self._redis = redis_client
        else:
            self._redis = redis.Redis.from_url(
                redis_url,
                decode_responses=True,
                socket_timeout=timeout_seconds,
                socket_connect_timeout=timeout_seconds,
            )

    def is_alive(self) -> bool:
        """Check whether the server answers a ping"""
        try:
            return bool(self._redis.ping())
        except redis.RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False

    def get(self, key: str) -> Optional[str]:
        value = self._redis.get(key)
        if isinstance(value, bytes):
            value = value.decode()
        return value

    def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        self._redis.set(key, value, ex=ttl_seconds)

    def delete(self, key: str) -> None:
        self._redis.delete(key)

    def close(self) -> None:
        self._redis.close()
        logger.info("Redis connection closed")
